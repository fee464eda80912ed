"""Structured logging configuration."""

import logging
import sys
from typing import TextIO

import structlog
from structlog.types import EventDict, WrappedLogger


SERVICE_NAME = "validator-rewards"

# Stdlib loggers owned by the ASGI server.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def add_service_name(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the service name."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the service.

    structlog events carry the request id bound by the API middleware, the
    service name, level and an ISO timestamp. uvicorn's stdlib loggers are
    pointed at the same stream and level so server and application lines
    interleave in one place.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True).
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(levelname)s %(name)s %(message)s",
        stream=output,
        level=level,
        force=True,
    )
    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.setLevel(level)
        server_logger.propagate = True


def parse_log_level(name: str) -> int:
    """Convert a level name such as ``"info"`` to a logging level.

    Args:
        name: Case-insensitive level name.

    Returns:
        Numeric logging level.

    Raises:
        ValueError: If the name is not a known level.
    """
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        msg = f"Unknown log level: {name}"
        raise ValueError(msg)
    return level


def bind_request_context(request_id: str) -> None:
    """Bind request context to all subsequent log messages.

    Args:
        request_id: Unique request identifier.
    """
    structlog.contextvars.bind_contextvars(request_id=request_id)


def clear_request_context() -> None:
    """Clear request context from log messages."""
    structlog.contextvars.unbind_contextvars("request_id")
