"""structlog setup for the table QA service.

One processor chain serves both structlog loggers and stdlib loggers
(uvicorn, fastapi), so every line carries the bound request_id and goes
through credential scrubbing before it is rendered.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_NAME = "table-qa-service"

# Keys whose values must never reach a log sink
SENSITIVE_KEYS = frozenset({"credential", "token", "authorization", "api_key"})
REDACTED = "***"

# Third-party loggers capped at WARNING; httpx logs every request line at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "multipart")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict["app"] = APP_NAME
    return event_dict


def scrub_credentials(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask credential-bearing keys and any value carrying a bearer token."""
    for key, value in event_dict.items():
        if key.lower() in SENSITIVE_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, str) and "Bearer " in value:
            event_dict[key] = REDACTED
    return event_dict


def _renderer_for(environment: str) -> tuple[list[Processor], Processor]:
    """Extra processors and the final renderer for an environment."""
    if environment.lower() == "production":
        return [structlog.processors.format_exc_info], structlog.processors.JSONRenderer()
    return [], structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog and route stdlib logging through it.

    Production renders JSON lines; any other environment renders for a
    console. Safe to call more than once: the root handler is replaced.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    extra, renderer = _renderer_for(environment)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        scrub_credentials,
        *extra,
    ]

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
    handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer=type(renderer).__name__,
    )
