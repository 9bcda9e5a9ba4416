"""Typed VMAP/VAST document model.

Records are immutable; repeatable elements are tuples even when the source
document holds a single element.
"""

import json
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, ClassVar, Union

from .tree import XmlNode


RawNode = Union[XmlNode, tuple[XmlNode, ...], None]
"""Unmapped converter output passed through as-is."""


class AdType(str, Enum):
    """VAST ad variants. Only InLine ads are mapped."""

    INLINE = "inline"


class CreativeType(str, Enum):
    """Creative kinds. Only linear creatives are mapped."""

    LINEAR = "linear"


def _plain(value: Any) -> Any:
    if isinstance(value, XmlNode):
        return value.to_dict()
    if is_dataclass(value):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, frozenset):
        return sorted(value)
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class _Record:
    """Shared ``to_dict`` for model dataclasses."""

    # fields left out of to_dict() while they are None
    _omit_when_absent: ClassVar[frozenset[str]] = frozenset()

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and f.name in self._omit_when_absent:
                continue
            result[f.name] = _plain(value)
        return result


@dataclass(frozen=True)
class Impression(_Record):
    uri: str | None


@dataclass(frozen=True)
class Extension(_Record):
    value: str | None
    extension_type: str | None = None


@dataclass(frozen=True)
class TrackingEvent(_Record):
    """Beacon URI fired when playback reaches ``event`` (start, complete, ...)."""

    uri: str | None
    event: str | None


@dataclass(frozen=True)
class ClickUri(_Record):
    uri: str | None
    id: str | None = None


@dataclass(frozen=True)
class VideoClicks(_Record):
    """Click configuration of a creative.

    A field is ``None`` when its element was absent from the document and is
    then left out of ``to_dict()``; present elements always yield a value.
    """

    _omit_when_absent: ClassVar[frozenset[str]] = frozenset(
        {"click_through", "click_trackings", "custom_clicks"}
    )

    click_through: ClickUri | None = None
    click_trackings: tuple[ClickUri, ...] | None = None
    custom_clicks: tuple[ClickUri, ...] | None = None


@dataclass(frozen=True)
class MediaFile(_Record):
    """One rendition of a creative's video asset."""

    uri: str | None
    id: str | None = None
    height: str | None = None
    width: str | None = None
    delivery: str | None = None
    codec: str | None = None
    mimetype: str | None = None
    api_framework: str | None = None
    bitrate: str | None = None
    min_bitrate: str | None = None
    max_bitrate: str | None = None
    scalable: str | None = None
    maintain_aspect_ratio: str | None = None


@dataclass(frozen=True)
class Creative(_Record):
    """A linear creative.

    ``extensions`` holds the ``CreativeExtensions`` converter output untouched;
    it is not mapped into ``Extension`` records.
    """

    duration: str
    media_files: tuple[MediaFile, ...]
    id: str | None = None
    ad_id: str | None = None
    sequence: str | None = None
    skip_offset: str | None = None
    trackings: tuple[TrackingEvent, ...] = ()
    video_clicks: VideoClicks = field(default_factory=VideoClicks)
    extensions: RawNode = None
    creative_type: CreativeType = CreativeType.LINEAR


@dataclass(frozen=True)
class AdSystem(_Record):
    name: str | None
    version: str | None = None


@dataclass(frozen=True)
class Pricing(_Record):
    value: str | None
    currency: str | None = None
    model: str | None = None


@dataclass(frozen=True)
class InlineAd(_Record):
    """A VAST InLine ad with its full payload."""

    ad_system: AdSystem
    ad_title: str | None
    description: str | None
    pricing: Pricing
    creatives: tuple[Creative, ...]
    id: str | None = None
    ad_type: AdType = AdType.INLINE
    extensions: tuple[Extension, ...] = ()
    error: str | None = None
    sequence: str | None = None
    advertiser: str | None = None
    survey: str | None = None
    impressions: tuple[Impression, ...] = ()


@dataclass(frozen=True)
class VastDocument(_Record):
    version: str | None
    ads: tuple[InlineAd, ...]


@dataclass(frozen=True)
class AdSource(_Record):
    vast_ad_data: VastDocument
    id: str | None = None
    ad_data_type: str | None = None
    ad_tag_uri: str | None = None
    allow_multiple_ads: str | None = None
    data_type: str | None = None
    follow_redirects: str | None = None
    custom_ad_data: str | None = None


@dataclass(frozen=True)
class AdBreak(_Record):
    """One scheduled interruption point.

    ``time_offset`` is kept as written (``start``, ``end``, ``00:00:15.000``,
    ``25%``, ``#1``).
    """

    break_types: frozenset[str]
    time_offset: str
    ad_source: AdSource
    break_id: str | None = None
    extensions: tuple[Extension, ...] = ()
    repeat_after: str | None = None


@dataclass(frozen=True)
class VmapDocument(_Record):
    version: str | None
    breaks: tuple[AdBreak, ...]

    def to_json(self, indent: int = 2) -> str:
        """Convert the document to JSON."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


__all__ = [
    "RawNode",
    "AdType",
    "CreativeType",
    "Impression",
    "Extension",
    "TrackingEvent",
    "ClickUri",
    "VideoClicks",
    "MediaFile",
    "Creative",
    "AdSystem",
    "Pricing",
    "InlineAd",
    "VastDocument",
    "AdSource",
    "AdBreak",
    "VmapDocument",
]
