"""
VMAP Parser Package

Turns a VMAP ad playlist (with embedded VAST InLine ads) into an immutable,
typed document tree that ad-insertion code can traverse without touching XML.

This package provides:
- VmapParser: entry point turning XML text into a VmapDocument
- convert_xml / XmlNode: the generic node tree built with lxml
- normalize: single-or-list normalization used by every mapper
- Typed document records and consumer helpers

Usage:
    from vmap_parser import VmapParser

    document = VmapParser().parse(xml_text)
    for ad_break in document.breaks:
        ads = ad_break.ad_source.vast_ad_data.ads
"""

from .config import VmapParserConfig
from .exceptions import (
    VmapConfigError,
    VmapException,
    VmapMissingInputError,
    VmapParseError,
    VmapStructureError,
    VmapUnsupportedAdError,
    VmapXMLError,
)
from .helpers import (
    click_through_uri,
    iter_creatives,
    prepare_tracking_events,
    select_media_file,
)
from .models import (
    AdBreak,
    AdSource,
    AdSystem,
    AdType,
    ClickUri,
    Creative,
    CreativeType,
    Extension,
    Impression,
    InlineAd,
    MediaFile,
    Pricing,
    TrackingEvent,
    VastDocument,
    VideoClicks,
    VmapDocument,
)
from .normalize import normalize
from .parser import VmapParser, create_parser, parse_vmap
from .settings import VmapParserSettings, get_settings
from .tree import XmlNode, convert_xml

__version__ = "1.0.0"

__all__ = [
    # Main classes
    "VmapParser",
    "create_parser",
    "parse_vmap",
    # Tree conversion
    "XmlNode",
    "convert_xml",
    "normalize",
    # Configuration
    "VmapParserConfig",
    "VmapParserSettings",
    "get_settings",
    # Document model
    "VmapDocument",
    "AdBreak",
    "AdSource",
    "VastDocument",
    "InlineAd",
    "AdSystem",
    "AdType",
    "Pricing",
    "Creative",
    "CreativeType",
    "MediaFile",
    "TrackingEvent",
    "VideoClicks",
    "ClickUri",
    "Extension",
    "Impression",
    # Errors
    "VmapException",
    "VmapParseError",
    "VmapMissingInputError",
    "VmapXMLError",
    "VmapStructureError",
    "VmapUnsupportedAdError",
    "VmapConfigError",
    # Helpers
    "iter_creatives",
    "select_media_file",
    "prepare_tracking_events",
    "click_through_uri",
    # Package metadata
    "__version__",
]
