"""One-shot workflow data models."""

from dataclasses import dataclass, field

from ..config import DEFAULT_HOST, DEFAULT_NUM_FRAMES, DEFAULT_TIMEOUT_S
from .actions import QueryFilter


@dataclass
class CaptureAndExportRequest(QueryFilter):
    """Launch, trigger one capture, then export its actions.

    basename defaults to the stem of the capture file.
    """

    executable: str = ""
    args: list[str] = field(default_factory=list)
    working_dir: str | None = None
    capture_file_template: str | None = None
    host: str = DEFAULT_HOST
    num_frames: int = DEFAULT_NUM_FRAMES
    timeout_s: int = DEFAULT_TIMEOUT_S
    output_dir: str = ""
    basename: str | None = None


@dataclass
class CaptureAndExportResult:
    target_ident: int
    capture_path: str
    capture_file_template: str | None
    stdout: str
    stderr: str
    actions_jsonl_path: str
    summary_json_path: str
    total_actions: int
    drawcall_actions: int
