from __future__ import annotations

import logging
import sys, json
from uvicorn.logging import ColourizedFormatter
from catalog.core.config import settings

_RESERVED = (
    "message", "args", "levelname", "levelno", "name", "pathname", "filename",
    "module", "lineno", "funcName", "msg", "exc_info", "exc_text", "stack_info",
    "created", "msecs", "relativeCreated", "thread", "threadName",
    "processName", "process", "taskName",
)


class _ScenarioLogFilter(logging.Filter):
    """Injects the scenario name into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        # scenario is passed through extra= by the step handlers
        record.scenario = getattr(record, "scenario", "-")  # type: ignore
        return True


class _JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname.upper(),
            "logger": record.name,
            "msg": record.getMessage(),
            "service": getattr(settings, "APP_NAME", "catalog-acceptance"),
            "scenario": getattr(record, "scenario", "-"),
        }

        # Merge extras (resource, entity_id, pattern, etc.)
        for k, v in record.__dict__.items():
            if k not in log_obj and k not in _RESERVED:
                log_obj[k] = v

        if record.exc_info:
            log_obj["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return _JsonLogFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z")
    return ColourizedFormatter("%(levelprefix)s %(name)s - %(message)s", use_colors=True)


def setup_logging():
    """Configures logging for the harness."""
    log_level = settings.LOG_LEVEL.upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if settings.LOG_ENABLE_CONSOLE:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter(settings.LOG_FORMAT))
        handler.addFilter(_ScenarioLogFilter())
        root_logger.addHandler(handler)

    # Less noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
