"""
Structured logging for the reservation service.

structlog renders every stdlib and structlog record through one handler:
JSON lines when LOG_FORMAT resolves to json (production by default),
coloured key/value output otherwise. Context bound by the request
middleware (request_id, method, path) rides along on every line, so a
conflict or retry log can be traced back to its request.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, WrappedLogger

from boothbook.core.config import get_settings

# Libraries that log per statement or per connection
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite", "asyncio")

_configured = False


def _add_service_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    settings = get_settings()
    event_dict.setdefault("service", settings.APP_NAME)
    event_dict.setdefault("env", settings.ENVIRONMENT)
    return event_dict


def _use_json(log_format: str, environment: str) -> bool:
    if log_format == "auto":
        return environment == "production"
    return log_format == "json"


def setup_logging() -> None:
    """Configure structlog and the root logger. Safe to call more than once."""
    global _configured
    if _configured:
        return

    settings = get_settings()
    json_logs = _use_json(settings.LOG_FORMAT, settings.ENVIRONMENT)

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        pre_chain += [_add_service_context, structlog.processors.format_exc_info]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
