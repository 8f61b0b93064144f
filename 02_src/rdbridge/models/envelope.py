"""Bridge response envelope."""

from dataclasses import dataclass
from typing import Any

from ..errors import CaptureTimeoutError, DomainError, ProtocolError

TIMEOUT_ERROR_KIND = "timeout"


@dataclass
class Envelope:
    """`{ok, result, error}` wrapper written by every bridge script.

    `error_kind` is optional and only set for failures the host maps to a
    dedicated exception (currently "timeout").
    """

    ok: bool
    result: Any = None
    error: str | None = None
    error_kind: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Envelope":
        """Build from parsed JSON. Raises ProtocolError on a malformed shape."""
        if not isinstance(data, dict):
            raise ProtocolError(f"response envelope must be a JSON object, got {type(data).__name__}")
        ok = data.get("ok")
        if not isinstance(ok, bool):
            raise ProtocolError("response envelope is missing a boolean `ok` field")
        error = data.get("error")
        return cls(
            ok=ok,
            result=data.get("result"),
            error=None if error is None else str(error),
            error_kind=data.get("error_kind"),
        )

    def unwrap(self) -> Any:
        """Return the result or raise the error the envelope carries."""
        if self.ok:
            if self.result is None:
                raise ProtocolError("missing result")
            return self.result

        message = self.error or "unknown error"
        if self.error_kind == TIMEOUT_ERROR_KIND:
            raise CaptureTimeoutError(message)
        raise DomainError(message)
