"""Capture launch and trigger data models."""

from dataclasses import dataclass, field

from ..config import DEFAULT_HOST, DEFAULT_NUM_FRAMES, DEFAULT_TIMEOUT_S


@dataclass
class CaptureLaunchRequest:
    """Run an executable under `renderdoccmd capture`."""

    executable: str
    args: list[str] = field(default_factory=list)
    working_dir: str | None = None
    capture_file_template: str | None = None


@dataclass
class CaptureLaunchResult:
    """The target ident is renderdoccmd's exit code."""

    target_ident: int
    stdout: str
    stderr: str


@dataclass
class TriggerCaptureRequest:
    """Ask a running, capture-instrumented target for new captures."""

    target_ident: int
    host: str = DEFAULT_HOST
    num_frames: int = DEFAULT_NUM_FRAMES
    timeout_s: int = DEFAULT_TIMEOUT_S


@dataclass
class TriggerCaptureResponse:
    capture_path: str
    frame_number: int
    api: str

    @classmethod
    def from_dict(cls, data: dict) -> "TriggerCaptureResponse":
        return cls(
            capture_path=str(data["capture_path"]),
            frame_number=int(data["frame_number"]),
            api=str(data["api"]),
        )
