"""
Logging setup for the table booking service.

JSON lines (python-json-logger) in staging and production, plain text in development.
Service operations log through a LogContext so every record carries the operation
name and the ids it touches.
"""
import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from pythonjsonlogger import jsonlogger

from core.config import Settings, get_settings


# Loggers that are too chatty at INFO
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "alembic.runtime.migration": logging.WARNING,
}


class BookingJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that stamps every record with service metadata."""

    def __init__(self, *args: Any, app_name: str = "", environment: str = "", **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.static_fields = {"app_name": app_name, "environment": environment}

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["location"] = f"{record.module}.{record.funcName}:{record.lineno}"
        log_record.update(self.static_fields)


def build_formatter(settings: Settings) -> logging.Formatter:
    """Pick the formatter for the current environment."""
    if settings.is_development:
        return logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    return BookingJsonFormatter(
        fmt="%(timestamp)s %(level)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        app_name=settings.app_name,
        environment=settings.app_env,
    )


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure the root logger once at process start.

    Args:
        settings: Application settings (defaults to environment)
    """
    settings = settings or get_settings()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(settings))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(settings.log_level)

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.db_echo else logging.WARNING)

    root.debug("Logging configured", extra={"environment": settings.app_env})


def get_logger(name: str) -> logging.Logger:
    """Return the module logger; handlers live on the root logger."""
    return logging.getLogger(name)


class LogContext(logging.LoggerAdapter):
    """
    Logger adapter that attaches fixed context to every record.

    Usage:
        log = LogContext(logger, operation="create_reservation", customer_id=10)
        log.warning("rejected", extra={"error_code": "no_availability"})
    """

    def __init__(self, logger: Optional[logging.Logger] = None, **context: Any):
        super().__init__(logger or get_logger(__name__), context)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs
