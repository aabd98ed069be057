"""Structured Logging - JSON records tagged with the request correlation ID

Resolution code passes context through ``extra``:

    logger.warning("No step instance found", extra={"case_id": 1001, "step_ref": "step_a"})

Only the keys listed in CONTEXT_FIELDS are copied into the JSON record.
"""
import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from ..config.settings import settings

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

CONTEXT_FIELDS = ("case_id", "step_ref", "user_id", "task_id", "membership_count", "error_code")

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(correlation_id)s] %(name)s: %(message)s"

QUIET_LOGGERS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "pymongo": logging.WARNING,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = correlation_id_var.get()
        if correlation_id:
            payload["correlation_id"] = correlation_id

        payload.update({
            field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)
        })

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class CorrelationFilter(logging.Filter):
    """Exposes the correlation ID to the plain text format"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "-"
        return True


def _build_formatter() -> logging.Formatter:
    if settings.log_format.lower() == "text":
        return logging.Formatter(TEXT_FORMAT)
    return JsonFormatter()


def _rotating_handler(filename: str, level: int = logging.NOTSET) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        os.path.join(settings.logs_path, filename),
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger: console plus app.log and error.log

    Args:
        level: Overrides settings.log_level when given
    """
    os.makedirs(settings.logs_path, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.INFO))
    root_logger.handlers.clear()

    formatter = _build_formatter()
    correlation_filter = CorrelationFilter()
    handlers = [
        logging.StreamHandler(sys.stdout),
        _rotating_handler("app.log"),
        _rotating_handler("error.log", logging.ERROR),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(correlation_filter)
        root_logger.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def set_correlation_id(correlation_id: str) -> None:
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get()
