"""VMAP event type constants."""

from enum import Enum


class VmapEvents(str, Enum):
    """Event type constants for structured logging."""

    # Parser events
    PARSE_STARTED = "vmap.parse.started"
    PARSE_COMPLETED = "vmap.parse.completed"
    PARSE_FAILED = "vmap.parse.failed"

    # Tree conversion events
    XML_CONVERTED = "vmap.xml.converted"
    XML_INVALID = "vmap.xml.invalid"

    # Mapping events
    STRUCTURE_MISSING = "vmap.structure.missing"


__all__ = ["VmapEvents"]
