"""
Structured logging configuration using structlog.

- Console output for development, JSON or key-value output otherwise
- Account identifiers masked before they reach any renderer

Importing openpankki configures nothing. Library loggers write through the
standard library "openpankki" logger, which only has a NullHandler until the
host application configures logging or calls :func:`configure_logging`.
"""

import logging
import sys
from typing import Any, cast

import structlog
from structlog.types import EventDict, Processor

# Keys whose values are account or payment identifiers
MASKED_KEYS = frozenset({"iban", "bban", "machine_bban", "reference", "barcode", "raw"})


def mask_identifier(value: str) -> str:
    """Mask an identifier, keeping the first 6 and last 4 characters."""
    if len(value) <= 10:
        return "*" * len(value)
    return f"{value[:6]}...{value[-4:]}"


def mask_account_data(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Mask account numbers, references and barcodes in log entries.

    Payment identifiers are personal data and never logged in full.
    """
    for key in MASKED_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = mask_identifier(value)

    return event_dict


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to every log entry."""
    from openpankki import __version__

    event_dict["app"] = "openpankki"
    event_dict["version"] = __version__
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    dev_mode: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: Whether to output JSON logs (recommended for production)
        dev_mode: Whether to use development-friendly output
    """
    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        mask_account_data,
    ]

    if dev_mode:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    elif json_logs:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def configure_from_settings() -> None:
    """Configure logging from the cached :class:`Settings`."""
    from openpankki.utils.config import get_settings

    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        dev_mode=settings.dev_mode,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Usage:
        logger = get_logger(__name__)
        logger.debug("bban_converted", bank="NDEAFIHH")
    """
    return cast(
        structlog.stdlib.BoundLogger,
        structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger),
    )


logging.getLogger("openpankki").addHandler(logging.NullHandler())
