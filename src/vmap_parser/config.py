"""
VMAP Parser Configuration Module

Provides the configuration class consumed by the tree converter and the
parser orchestrator.
"""

from dataclasses import dataclass, fields
from typing import Any

from .exceptions import VmapConfigError


@dataclass(frozen=True)
class VmapParserConfig:
    """Configuration for VMAP XML parsing.

    Attributes:
        encoding: Encoding used to turn ``str`` input into bytes for lxml; bytes
            input is decoded as its XML declaration says
        recover_on_error: Let lxml recover from malformed markup instead of failing
        huge_tree: Lift lxml's depth and text-size safety limits
        xml_preview_length: Characters of input quoted in error logs and in
            ``VmapXMLError.xml_preview``
    """

    encoding: str = "utf-8"
    recover_on_error: bool = False
    huge_tree: bool = False
    xml_preview_length: int = 200

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "VmapParserConfig":
        """Create configuration from dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            VmapParserConfig instance

        Raises:
            VmapConfigError: If the dictionary contains unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise VmapConfigError(
                f"Unknown parser configuration keys: {', '.join(unknown)}",
                config_key=unknown[0],
            )
        return cls(**config)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


__all__ = ["VmapParserConfig"]
