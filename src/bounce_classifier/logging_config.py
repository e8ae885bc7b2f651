"""Structured logging configuration using structlog.

JSON lines in production (one event per line, ready for Loki or ELK), the
colored console renderer everywhere else. Standard library loggers
(uvicorn, httpx) are routed through the same processors so request ids
bound by the API middleware show up on every line.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

SERVICE_NAME = "bounce-classifier"

# uvicorn.access duplicates the middleware's "Request completed" event
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the service name."""
    event_dict.setdefault("app", SERVICE_NAME)
    return event_dict


def build_shared_processors(json_logs: bool) -> list[Processor]:
    """Processors run for structlog and foreign (stdlib) events alike."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]
    if json_logs:
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    json_logs: Optional[bool] = None,
) -> None:
    """Configure structlog and the root logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment name; "production" switches to JSON
        json_logs: Force JSON (True) or console (False) output regardless
            of the environment
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if json_logs is None:
        json_logs = environment.lower() == "production"

    shared_processors = build_shared_processors(json_logs)
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if json_logs else "console",
    )
