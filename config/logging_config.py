"""
Logging configuration using structlog.

structlog events and plain stdlib records (SQLAlchemy, asyncio) go through
the same processor chain. The console gets a readable or JSON rendering on
stderr, so report output on stdout stays clean. The optional log file
always gets one JSON object per line.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

APP_NAME = "betledger"
HANDLER_PREFIX = f"{APP_NAME}."

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 5

NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every entry with the application name."""
    event_dict["app"] = APP_NAME
    return event_dict


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_app_context,
    ]


def _formatter(renderer: Processor, json_lines: bool) -> structlog.stdlib.ProcessorFormatter:
    processors: list[Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_lines:
        processors.append(structlog.processors.format_exc_info)
    processors.append(renderer)
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=processors,
    )


def _replace_handlers(root: logging.Logger, handlers: list[logging.Handler]) -> None:
    """Swap out handlers from a previous setup_logging call, leave foreign ones alone."""
    for existing in root.handlers[:]:
        if (existing.get_name() or "").startswith(HANDLER_PREFIX):
            root.removeHandler(existing)
            existing.close()
    for handler in handlers:
        root.addHandler(handler)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    json_format: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Safe to call more than once; the previous handlers are replaced.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a rotating JSON-lines log file
        json_format: Render console output as JSON instead of colored text
    """
    level = getattr(logging, log_level.upper())

    if json_format:
        console_renderer: Processor = structlog.processors.JSONRenderer()
    else:
        console_renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    console = logging.StreamHandler(sys.stderr)
    console.set_name(f"{HANDLER_PREFIX}console")
    console.setFormatter(_formatter(console_renderer, json_lines=json_format))
    handlers: list[logging.Handler] = [console]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.set_name(f"{HANDLER_PREFIX}file")
        file_handler.setFormatter(
            _formatter(structlog.processors.JSONRenderer(ensure_ascii=False), json_lines=True)
        )
        handlers.append(file_handler)

    root = logging.getLogger()
    _replace_handlers(root, handlers)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=_shared_processors()
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """
    Bind context variables to all subsequent log calls in this context.

    Example:
        bind_context(owner_id="user-1")
        logger.info("Stats computed")  # Will include owner_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
