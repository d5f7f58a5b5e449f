"""Structured logging configuration.

Every event is one JSON object on stdout, rendered through structlog's stdlib
integration so third-party stdlib loggers (uvicorn, fastapi) come out in the
same shape. Each event carries the service name and version, plus whatever is
bound in structlog.contextvars for the current request (request_id, method
and path, see RequestIDMiddleware).

Logging is configured once per process, from the module-level settings, when
this module is first imported. ``LOG_LEVEL`` is therefore process-global.
"""

import logging
import logging.config
import sys
from datetime import UTC, datetime
import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor, WrappedLogger

from app.config import Settings, settings


def _add_timestamp(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp the event with an ISO 8601 UTC time."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


def _service_stamper(app_settings: Settings) -> Processor:
    """Processor adding the API title and version, so mixed log streams can be split."""
    service = {"service": app_settings.api_title, "version": app_settings.api_version}

    def add_service(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in service.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service


def configure_logging(app_settings: Settings) -> None:
    """Point structlog and the stdlib root logger at one JSON formatter on stdout."""
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _service_stamper(app_settings),
        _add_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": structlog.processors.JSONRenderer(),
                    "foreign_pre_chain": shared_processors,
                },
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": sys.stdout,
                },
            },
            "root": {"handlers": ["stdout"], "level": app_settings.log_level.upper()},
        }
    )


configure_logging(settings)


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger, typically ``get_logger(__name__)``.

    Example:
        logger.error("conflict", error="Email already registered", error_type="...")
        # {"event": "conflict", "service": "People API", "request_id": ..., ...}
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
