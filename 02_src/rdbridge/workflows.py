"""Host-side operations that run inside qrenderdoc through the bridge."""

from dataclasses import asdict, fields, replace
from pathlib import Path

from .bridge import IScriptingBridge
from .config import default_exports_dir
from .installation import RenderDocInstallation
from .logging_config import get_logger
from .models import (
    CaptureAndExportRequest,
    CaptureAndExportResult,
    CaptureLaunchRequest,
    ExportActionsRequest,
    ExportActionsResponse,
    FindEventsRequest,
    FindEventsResponse,
    QueryFilter,
    TriggerCaptureRequest,
    TriggerCaptureResponse,
)
from .remote import EXPORT_ACTIONS_SCRIPT, FIND_EVENTS_SCRIPT, TRIGGER_CAPTURE_SCRIPT

logger = get_logger(__name__)

DEFAULT_BASENAME = "capture"


def trigger_capture(bridge: IScriptingBridge, request: TriggerCaptureRequest) -> TriggerCaptureResponse:
    """Connect to a running target and wait for the capture it produces."""
    return bridge.call(TRIGGER_CAPTURE_SCRIPT, asdict(request), TriggerCaptureResponse.from_dict)


def find_events(bridge: IScriptingBridge, request: FindEventsRequest) -> FindEventsResponse:
    response = bridge.call(FIND_EVENTS_SCRIPT, asdict(request), FindEventsResponse.from_dict)
    logger.info(
        "Found %d matching actions",
        response.total_matches,
        extra={"context": {"capture_path": response.capture_path, "truncated": response.truncated}},
    )
    return response


def export_actions_jsonl(bridge: IScriptingBridge, request: ExportActionsRequest) -> ExportActionsResponse:
    """Write `<basename>.actions.jsonl` and `<basename>.summary.json` into output_dir.

    An empty output_dir means the exports directory under the current working
    directory. An empty basename means the capture file's stem.
    """
    if not request.output_dir:
        request = replace(request, output_dir=str(default_exports_dir(Path.cwd())))
    if not request.basename:
        request = replace(request, basename=basename_for_capture(request.capture_path))
    Path(request.output_dir).mkdir(parents=True, exist_ok=True)
    response = bridge.call(EXPORT_ACTIONS_SCRIPT, asdict(request), ExportActionsResponse.from_dict)
    logger.info(
        "Exported %d actions to %s",
        response.total_actions,
        response.actions_jsonl_path,
    )
    return response


def basename_for_capture(capture_path: str) -> str:
    return Path(capture_path).stem or DEFAULT_BASENAME


def _query_filter(request: QueryFilter) -> dict:
    return {f.name: getattr(request, f.name) for f in fields(QueryFilter)}


def capture_and_export_actions(
    installation: RenderDocInstallation,
    bridge: IScriptingBridge,
    request: CaptureAndExportRequest,
) -> CaptureAndExportResult:
    """Launch the target, trigger one capture and export its action tree.

    Stops at the first failing step and lets its error propagate.
    """
    launched = installation.launch_capture(
        CaptureLaunchRequest(
            executable=request.executable,
            args=list(request.args),
            working_dir=request.working_dir,
            capture_file_template=request.capture_file_template,
        )
    )

    captured = trigger_capture(
        bridge,
        TriggerCaptureRequest(
            target_ident=launched.target_ident,
            host=request.host,
            num_frames=request.num_frames,
            timeout_s=request.timeout_s,
        ),
    )

    exported = export_actions_jsonl(
        bridge,
        ExportActionsRequest(
            capture_path=captured.capture_path,
            output_dir=request.output_dir,
            basename=request.basename or "",
            **_query_filter(request),
        ),
    )

    return CaptureAndExportResult(
        target_ident=launched.target_ident,
        capture_path=exported.capture_path,
        capture_file_template=request.capture_file_template,
        stdout=launched.stdout,
        stderr=launched.stderr,
        actions_jsonl_path=exported.actions_jsonl_path,
        summary_json_path=exported.summary_json_path,
        total_actions=exported.total_actions,
        drawcall_actions=exported.drawcall_actions,
    )
