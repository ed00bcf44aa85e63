"""Structured logging configuration for gymlist.

Wires stdlib logging and ``structlog`` together so the engine's debug events
(page clamps, loader transitions, subscription changes) end up in the host
application's log stream. Output is either JSON or a console format.

Typical usage
- Call ``configure_logging(log_level, log_format)`` once at startup
- Acquire loggers via ``get_logger(__name__)``
"""

from __future__ import annotations

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import LoggerFactory, add_logger_name

from gymlist.config import Settings


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    *,
    service_name: Optional[str] = None,
) -> None:
    """Configure structured logging.

    Parameters
    - log_level: ``DEBUG``, ``INFO``, ``WARNING``, ``ERROR`` (case-insensitive)
    - log_format: ``json`` for production; ``console`` for local dev
    - service_name: optional identifier bound to each log line
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_logger_name,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    if service_name:
        structlog.contextvars.bind_contextvars(service=service_name)


def configure_from_settings(settings: Settings) -> None:
    """Configure logging from the ``app`` section of `Settings`."""
    configure_logging(
        settings.app.log_level,
        settings.app.log_format,
        service_name=settings.app.name,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger backed by the stdlib logger `name`.

    Events go through stdlib logging, so its levels decide what is emitted;
    debug events stay silent until the host enables them.
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )
