"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any, TextIO

import structlog

# Plotting and geo libraries that log through stdlib logging. Their DEBUG
# output (font scans, PNG chunk dumps) drowns the atlas events.
_CHATTY_LIBRARIES = ("matplotlib", "PIL", "fiona", "pyogrio")


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging for the atlas.

    Log lines go to stderr by default so that rich tables printed by the
    CLI on stdout stay clean.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, emit one JSON object per event.
        stream: Output stream (defaults to sys.stderr).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    stream = stream or sys.stderr

    logging.basicConfig(format="%(message)s", stream=stream, level=log_level)
    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderers: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=stream.isatty())]

    structlog.configure(
        processors=[*shared_processors, *renderers],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Module logger; pass __name__."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind values to every log event inside a with-block.

    Example:
        with log_context(dataset="confirmed_global"):
            log.info("Aggregated by entity")  # carries dataset=...
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
