"""Logging configuration and utilities."""

import logging
from typing import Any

import structlog


def get_context_logger(name: str) -> structlog.BoundLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Install the structlog processor chain used by the parser.

    Args:
        level: Minimum log level name (e.g. "DEBUG", "INFO")
        json_output: Render JSON lines instead of the console format
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
    )


class ParseContext:
    """Context manager binding parse-scoped values into the logging context."""

    def __init__(self, **context: Any):
        """Initialize with context variables.

        Args:
            **context: Context key-value pairs
        """
        self.context = context

    def __enter__(self):
        """Enter context."""
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context."""
        structlog.contextvars.unbind_contextvars(*self.context.keys())


__all__ = [
    "get_context_logger",
    "configure_logging",
    "ParseContext",
]
