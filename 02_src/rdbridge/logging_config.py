"""JSON logging for rdbridge.

Modules attach structured data with `extra={"context": {...}}`. Keys that
identify a bridge run or a spawned tool are lifted to top-level fields of the
log line; everything else stays under "context".
"""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

LOG_LEVEL_ENV = "LOG_LEVEL"
LOG_FILE_ENV = "RDBRIDGE_LOG_FILE"

RUN_FIELDS = ("run_dir", "program", "target_ident", "capture_path", "error_kind")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            context = dict(context)
            for key in RUN_FIELDS:
                if key in context:
                    log_data[key] = context.pop(key)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
            exc = record.exc_info[1]
            if exc is not None:
                log_data["error_type"] = type(exc).__name__

        return json.dumps(log_data, default=str)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Setup structured logging for rdbridge.

    Args:
        log_level: Log level name. Defaults to LOG_LEVEL or INFO.
        log_file: Rotating log file. Defaults to RDBRIDGE_LOG_FILE or 04_logs/rdbridge.log.
    """
    if log_level is None:
        log_level = os.getenv(LOG_LEVEL_ENV, "INFO")

    if log_file is None:
        log_file = os.getenv(LOG_FILE_ENV) or str(DEFAULT_LOG_PATH)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    # stdout of CLI callers carries results
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "rdbridge.logging_config.JSONFormatter",
            },
        },
        "handlers": {
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_file,
                "maxBytes": 10 * 1024 * 1024,
                "backupCount": 5,
                "formatter": "json",
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": log_level.upper(),
            "handlers": ["file", "console"],
        },
    }

    logging.config.dictConfig(logging_config)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
