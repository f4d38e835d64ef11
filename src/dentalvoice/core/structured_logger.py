"""
Structured logging utilities for the extraction pipeline.
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from ..application.ports.services.event_emitter import EventEmitter


class StructuredLogger:
    """
    Structured logger that outputs JSON logs for easy parsing and querying
    """

    def __init__(self, name: str, level: int = logging.INFO):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

    def log(self, level: str, message: str, **kwargs):
        """Log with structured data attached as ``extra_data``."""
        log_method = getattr(self.logger, level, None)
        if log_method is None:
            raise ValueError(f"Unknown log level: {level}")
        log_method(message, extra={"extra_data": kwargs})

    def info(self, message: str, **kwargs):
        self.log("info", message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.log("warning", message, **kwargs)

    def error(self, message: str, **kwargs):
        self.log("error", message, **kwargs)

    def debug(self, message: str, **kwargs):
        self.log("debug", message, **kwargs)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_obj.update(record.extra_data)

        return json.dumps(log_obj, default=str, ensure_ascii=False)


class StructuredLogEventEmitter(EventEmitter):
    """EventEmitter that writes each pipeline event as a structured log line."""

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self._logger = logger or get_logger("dentalvoice.events")

    def emit(self, event: str, **fields: Any) -> None:
        self._logger.info(event, event=event, **fields)


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Attach a single stdout handler to the ``dentalvoice`` logger namespace."""
    root = logging.getLogger("dentalvoice")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.propagate = False


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger"""
    return StructuredLogger(name)
