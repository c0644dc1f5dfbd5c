"""structlog logger setup."""

from __future__ import annotations

import logging
import sys

import structlog

from .models import LogSection


def _renderer_chain(format: str) -> list[structlog.types.Processor]:
    chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if format == "json":
        chain += [structlog.processors.StackInfoRenderer(), structlog.processors.JSONRenderer()]
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def new_logger(
    name: str = "baggage_propagation",
    level: str = "INFO",
    format: str = "json",
) -> structlog.stdlib.BoundLogger:
    """Configure structlog for the library and return a named logger.

    Dropped baggage entries and correlator transitions are reported through
    the loggers this configures, so call it once at process start.

    Args:
        name: logger name
        level: log level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: output format ("json" or "text")
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=_renderer_chain(format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    return structlog.stdlib.get_logger(name)


def logger_from_config(section: LogSection) -> structlog.stdlib.BoundLogger:
    """Build a logger from the log section of a PropagationConfig."""
    return new_logger(level=section.level, format=section.format)
