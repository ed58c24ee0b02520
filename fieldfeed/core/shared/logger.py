"""
Logging setup and context-carrying loggers.

Structured context (order number, recipient, template, ...) travels on the
record as ``extra_data``. The JSON formatter emits it as an object; the
console formatters append it as ``key=value`` pairs so a failed dispatch can
be found and resent from plain logs too.
"""

import copy
import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import UTC, datetime
from typing import Any

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Keyword arguments that belong to logging itself rather than to the context
_LOGGING_KWARGS = frozenset({"exc_info", "stack_info", "stacklevel", "extra"})


def _context_of(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "extra_data", None) or {}


class JSONFormatter(logging.Formatter):
    """One JSON object per record, context under ``context``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        context = _context_of(record)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class PlainFormatter(logging.Formatter):
    """Standard console line followed by ``[key=value ...]``; None values are left out."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        pairs = [f"{key}={value}" for key, value in _context_of(record).items() if value is not None]
        return f"{line} [{' '.join(pairs)}]" if pairs else line


class ColoredFormatter(PlainFormatter):
    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        # Other handlers see the same record
        tinted = copy.copy(record)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that stamps a context dict on every record.

    Extra keyword arguments on a call are merged into the context for that
    record only, e.g. ``log.error("Delivery failed", error_code="SMTP")``.
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None):
        super().__init__(logging.getLogger(name), dict(context or {}))

    @property
    def context(self) -> dict[str, Any]:
        return dict(self.extra)

    def with_context(self, **kwargs: Any) -> "ContextLogger":
        return ContextLogger(self.logger.name, {**self.extra, **kwargs})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        call_context = {key: kwargs.pop(key) for key in list(kwargs) if key not in _LOGGING_KWARGS}
        extra = dict(kwargs.get("extra") or {})
        extra["extra_data"] = {**self.extra, **call_context}
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: str = "INFO", format_type: str = "colored", log_file: str | None = None) -> None:
    """
    Install the root handlers once at startup.

    Args:
        level: Root level name
        format_type: ``colored``, ``plain`` or ``json`` for the console
        log_file: Optional path that receives the same records as JSON lines
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    formatters: dict[str, logging.Formatter] = {
        "json": JSONFormatter(),
        "colored": ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT),
        "plain": PlainFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT),
    }
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    handlers[0].setFormatter(formatters.get(format_type, formatters["plain"]))

    if log_file:
        handlers.append(logging.FileHandler(log_file))
        handlers[-1].setFormatter(formatters["json"])

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)

    # Access logs duplicate RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str, context: dict[str, Any] | None = None) -> ContextLogger:
    return ContextLogger(name, context)


def get_api_logger(route_name: str) -> ContextLogger:
    return get_logger(f"api.{route_name}", {"component": "api", "route": route_name})


def get_service_logger(service_name: str) -> ContextLogger:
    """Logger for a service module, tagged with the service name."""
    return get_logger(f"service.{service_name}", {"component": "service", "service": service_name})
