"""Logging setup.

The engine never logs unless a logger is handed to it. ``silent_logger`` is
the default it falls back to; ``configure_logging`` is a convenience for
applications that want rowbind's debug events on the console or as JSON.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def silent_logger() -> Any:
    """A bound logger that drops everything below CRITICAL and prints nothing."""
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
    )


def get_logger(name: str = "rowbind", **initial_values: Any) -> Any:
    """Return a structlog logger suitable for ``Engine(logger=...)``."""
    return structlog.get_logger(name, **initial_values)


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structlog for an application using rowbind.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        log_format: ``console`` or ``json``.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
