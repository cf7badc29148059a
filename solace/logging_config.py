"""Logging setup: stdlib loggers rendered through structlog.

Modules keep using ``logging.getLogger(__name__)``; this routes every record
(ours, uvicorn's, SQLAlchemy's) through one ``ProcessorFormatter`` so output
is either JSON lines or a readable console format.
"""
from __future__ import annotations

import logging
import sys

import structlog

from .config import settings


def setup_logging(level: str | None = None, fmt: str | None = None, log_file: str | None = None) -> None:
    """Configure root logging from ``settings.logging`` (arguments override)."""
    level = (level or settings.logging.level).upper()
    fmt = fmt or settings.logging.format
    log_file = log_file or settings.logging.file

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
        final_processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ]
    else:
        final_processors = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=final_processors,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=settings.app_name)
