"""
Logging Configuration

One output stream for the whole process. structlog events and plain stdlib
records (uvicorn, SQLAlchemy, redis) are rendered by the same
ProcessorFormatter, so every line carries the request context bound by
the request middleware and production output stays pure JSON.

Log Output:
===========
Development:
    2024-01-15 10:30:00 [info     ] List item added    [mylist.shared.services.mylist_service] request_id=9f1c... user_id=550e...

Production (JSON):
    {"event": "List item added", "level": "info", "logger": "mylist.shared.services.mylist_service",
     "request_id": "9f1c...", "user_id": "550e...", "timestamp": "2024-01-15T10:30:00Z"}

Usage:
======
    from mylist.shared.core.logging import logger, get_logger, log_context

    logger.info("List item added", user_id=user_id, content_id=content_id)

    cache_logger = get_logger("mylist.cache")
    cache_logger.warning("Version bump failed", user_id=user_id)

    # Bound for the rest of the current request
    log_context(request_id=request_id)
"""

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

from mylist.config.settings import settings


HANDLER_NAME = "mylist"

# Third-party loggers that are chatty below WARNING
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncio", "redis")


def _renderer() -> Processor:
    if settings.is_development:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """
    Route structlog and stdlib logging through one handler.

    - structlog events pass the shared chain, then are handed to stdlib
      wrapped for ProcessorFormatter.
    - Foreign stdlib records get the same chain as `foreign_pre_chain`,
      which includes the request context variables.
    - Development renders to the console, everything else to JSON.

    Called automatically when this module is imported. Safe to call again;
    the previously installed handler is replaced.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper())

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    final_processors: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if not settings.is_development:
        final_processors.append(structlog.processors.format_exc_info)
    final_processors.append(_renderer())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=final_processors,
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Named structlog logger; pass __name__ so output can be filtered by module."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """
    Bind key-value pairs to every later log line of the current context.

    Stored in contextvars, so concurrent requests do not see each other's
    values. Applies to stdlib records as well.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Drop all bound context; called when a request finishes."""
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("mylist")
