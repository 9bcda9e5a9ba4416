"""VMAP XML parser producing the typed document model."""

from pathlib import Path
from typing import Any

from .config import VmapParserConfig
from .events import VmapEvents
from .exceptions import VmapMissingInputError, VmapParseError, VmapStructureError
from .log_config import ParseContext, configure_logging, get_context_logger
from .mappers import map_ad_breaks
from .models import VmapDocument
from .settings import VmapParserSettings
from .tree import convert_xml


class VmapParser:
    """Parser for VMAP documents with embedded VAST ad responses.

    The parser keeps no state between calls apart from the optional XML
    string given at construction, which ``parse()`` falls back to.
    """

    def __init__(self, xml: str | bytes | None = None, config: VmapParserConfig | None = None):
        self.logger = get_context_logger("vmap_parser")
        self.xml = xml or None
        self.config = config or VmapParserConfig()

    def parse(self, xml: str | bytes | None = None) -> VmapDocument:
        """Parse a VMAP XML string into a ``VmapDocument``.

        Args:
            xml: Raw VMAP XML; defaults to the string given at construction

        Returns:
            The mapped document

        Raises:
            VmapMissingInputError: If no XML is available
            VmapXMLError: If the input is not well-formed XML
            VmapStructureError: If a required element or attribute is missing
        """
        source = xml or self.xml
        if not source:
            self.logger.error(VmapEvents.PARSE_FAILED, error="XML input is required")
            raise VmapMissingInputError("XML input is required")

        with ParseContext(xml_length=len(source)):
            self.logger.debug(VmapEvents.PARSE_STARTED)
            root = convert_xml(source, self.config)

            try:
                if root.tag != "VMAP":
                    raise VmapStructureError(
                        f"Expected VMAP root element, got '{root.tag}'",
                        path=root.path,
                        missing="VMAP",
                    )
                document = VmapDocument(
                    version=root.attr("version"),
                    breaks=map_ad_breaks(root),
                )
            except VmapParseError as e:
                self.logger.error(
                    VmapEvents.PARSE_FAILED,
                    error=str(e),
                    xml_preview=self._preview(source),
                )
                raise

            self.logger.info(
                VmapEvents.PARSE_COMPLETED,
                vmap_version=document.version,
                breaks_count=len(document.breaks),
                ads_count=sum(len(b.ad_source.vast_ad_data.ads) for b in document.breaks),
            )
            return document

    def parse_file(self, filepath: str | Path) -> VmapDocument:
        """Parse VMAP from file."""
        with open(filepath, "rb") as f:
            return self.parse(f.read())

    def _preview(self, source: str | bytes) -> str:
        preview = source[: self.config.xml_preview_length]
        if isinstance(preview, bytes):
            return preview.decode("utf-8", errors="replace")
        return preview

    @classmethod
    def from_config(cls, config: dict[str, Any], xml: str | bytes | None = None) -> "VmapParser":
        """Create parser from configuration dictionary.

        Args:
            config: Configuration dictionary
            xml: Optional XML to cache on the parser

        Returns:
            VmapParser: Configured parser instance
        """
        return cls(xml=xml, config=VmapParserConfig.from_dict(config))

    @classmethod
    def from_settings(cls, settings: VmapParserSettings) -> "VmapParser":
        """Create parser from loaded settings.

        Also applies the logging section (``log_level``, ``log_json``) so a
        settings file controls the whole parser setup.
        """
        configure_logging(level=settings.log_level, json_output=settings.log_json)
        return cls.from_config(settings.parser)


def create_parser(**kwargs) -> VmapParser:
    """Create a VmapParser instance.

    Returns:
        VmapParser: Parser instance
    """
    return VmapParser(**kwargs)


def parse_vmap(xml: str | bytes, config: VmapParserConfig | None = None) -> VmapDocument:
    """Parse ``xml`` with a fresh parser."""
    return VmapParser(config=config).parse(xml)


__all__ = ["VmapParser", "create_parser", "parse_vmap"]
