"""Application facade: one installation, one bridge, every operation."""

import os
from dataclasses import replace
from pathlib import Path
from typing import Mapping, Protocol

from . import workflows
from .bridge import IScriptingBridge
from .config import PathLike, default_artifacts_dir, default_exports_dir, default_scripts_dir, resolve_path_from_base
from .diagnostics import diagnose_environment, diagnose_vulkan_layer
from .installation import RenderDocInstallation
from .logging_config import get_logger
from .models import (
    CaptureAndExportRequest,
    CaptureAndExportResult,
    CaptureLaunchRequest,
    CaptureLaunchResult,
    EnvironmentDiagnosis,
    ExportActionsRequest,
    ExportActionsResponse,
    FindEventsRequest,
    FindEventsResponse,
    TriggerCaptureRequest,
    TriggerCaptureResponse,
    VulkanLayerDiagnosis,
)

logger = get_logger(__name__)


class IApplication(Protocol):
    """Operations exposed to the HTTP layer."""

    @property
    def installation(self) -> RenderDocInstallation:
        ...

    def diagnose_vulkan_layer(self) -> VulkanLayerDiagnosis:
        ...

    def diagnose_environment(self) -> EnvironmentDiagnosis:
        ...

    def capture_template(self, name: str) -> str:
        ...

    def launch_capture(self, request: CaptureLaunchRequest) -> CaptureLaunchResult:
        ...

    def save_thumbnail(self, capture_path: PathLike, output_path: PathLike) -> Path:
        ...

    def trigger_capture(self, request: TriggerCaptureRequest) -> TriggerCaptureResponse:
        ...

    def find_events(self, request: FindEventsRequest) -> FindEventsResponse:
        ...

    def export_actions_jsonl(self, request: ExportActionsRequest) -> ExportActionsResponse:
        ...

    def capture_and_export_actions(self, request: CaptureAndExportRequest) -> CaptureAndExportResult:
        ...


class Application:
    """Main application.

    Relative paths in requests are resolved against `cwd`. The installation
    is detected on first use, and the bridge is created with it.
    """

    def __init__(
        self,
        cwd: PathLike | None = None,
        installation: RenderDocInstallation | None = None,
        env: Mapping[str, str] | None = None,
        bridge: IScriptingBridge | None = None,
    ):
        self._cwd = Path(cwd) if cwd is not None else Path.cwd()
        self._env = env
        self._installation = installation
        self._bridge = bridge

    @property
    def cwd(self) -> Path:
        return self._cwd

    @property
    def installation(self) -> RenderDocInstallation:
        if self._installation is None:
            self._installation = RenderDocInstallation.detect(env=self._env)
            logger.info(
                "Detected RenderDoc installation",
                extra={"context": {"root_dir": str(self._installation.root_dir)}},
            )
        return self._installation

    @property
    def bridge(self) -> IScriptingBridge:
        if self._bridge is None:
            self._bridge = self.installation.create_bridge(default_scripts_dir(self._cwd))
        return self._bridge

    def resolve(self, value: PathLike) -> Path:
        return resolve_path_from_base(self._cwd, value)

    def _resolve_optional(self, value: str | None) -> str | None:
        return os.fspath(self.resolve(value)) if value else None

    def _output_dir(self, value: str | None) -> str:
        return os.fspath(self.resolve(value) if value else default_exports_dir(self._cwd))

    # Diagnostics

    def diagnose_vulkan_layer(self) -> VulkanLayerDiagnosis:
        return diagnose_vulkan_layer(self.installation)

    def diagnose_environment(self) -> EnvironmentDiagnosis:
        return diagnose_environment(self.installation, env=self._env)

    # Capture

    def capture_template(self, name: str) -> str:
        """`<artifacts>/<name>.rdc`; the artifacts directory is created."""
        artifacts_dir = default_artifacts_dir(self._cwd)
        artifacts_dir.mkdir(parents=True, exist_ok=True)
        return os.fspath(artifacts_dir / f"{name}.rdc")

    def launch_capture(self, request: CaptureLaunchRequest) -> CaptureLaunchResult:
        request = replace(
            request,
            executable=os.fspath(self.resolve(request.executable)),
            working_dir=self._resolve_optional(request.working_dir),
            capture_file_template=self._resolve_optional(request.capture_file_template),
        )
        return self.installation.launch_capture(request)

    def save_thumbnail(self, capture_path: PathLike, output_path: PathLike) -> Path:
        output = self.resolve(output_path)
        self.installation.save_thumbnail(self.resolve(capture_path), output)
        return output

    def trigger_capture(self, request: TriggerCaptureRequest) -> TriggerCaptureResponse:
        return workflows.trigger_capture(self.bridge, request)

    # Actions

    def find_events(self, request: FindEventsRequest) -> FindEventsResponse:
        request = replace(request, capture_path=os.fspath(self.resolve(request.capture_path)))
        return workflows.find_events(self.bridge, request)

    def export_actions_jsonl(self, request: ExportActionsRequest) -> ExportActionsResponse:
        capture_path = self.resolve(request.capture_path)
        request = replace(
            request,
            capture_path=os.fspath(capture_path),
            output_dir=self._output_dir(request.output_dir),
        )
        return workflows.export_actions_jsonl(self.bridge, request)

    def capture_and_export_actions(self, request: CaptureAndExportRequest) -> CaptureAndExportResult:
        request = replace(
            request,
            executable=os.fspath(self.resolve(request.executable)),
            working_dir=self._resolve_optional(request.working_dir),
            capture_file_template=self._resolve_optional(request.capture_file_template),
            output_dir=self._output_dir(request.output_dir),
        )
        logger.info("Starting capture-and-export for %s", request.executable)
        return workflows.capture_and_export_actions(self.installation, self.bridge, request)
