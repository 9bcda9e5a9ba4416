"""Logging configuration package."""

from .main import (
    ParseContext,
    configure_logging,
    get_context_logger,
)


__all__ = [
    "get_context_logger",
    "ParseContext",
    "configure_logging",
]
