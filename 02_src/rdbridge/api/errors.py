"""Mapping of rdbridge errors to HTTP responses."""

from fastapi import HTTPException

from ..errors import (
    CaptureTimeoutError,
    DomainError,
    InfrastructureError,
    InstallationNotFoundError,
    ProtocolError,
    RenderdogError,
)
from ..logging_config import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = (
    (InstallationNotFoundError, 503),
    (CaptureTimeoutError, 504),
    (DomainError, 422),
    (InfrastructureError, 502),
    (ProtocolError, 500),
)


def status_for(error: RenderdogError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500


def to_http_exception(error: RenderdogError) -> HTTPException:
    status = status_for(error)
    logger.error(
        "Request failed: %s",
        error,
        extra={"context": {"error_type": type(error).__name__, "status": status}},
    )
    return HTTPException(status_code=status, detail=str(error))
