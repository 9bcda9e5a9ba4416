"""Mappers from converted XML nodes to the typed document model.

Each mapper is a pure function of its input node(s). Repeatable elements are
always routed through ``normalize`` before iteration. Missing required
elements surface as ``VmapStructureError`` raised by the checked accessors
on ``XmlNode``.
"""

from typing import Sequence

from .exceptions import VmapStructureError, VmapUnsupportedAdError
from .models import (
    AdBreak,
    AdSource,
    AdSystem,
    ClickUri,
    Creative,
    Extension,
    Impression,
    InlineAd,
    MediaFile,
    Pricing,
    TrackingEvent,
    VastDocument,
    VideoClicks,
)
from .normalize import normalize
from .tree import XmlNode


def _require_items(items: Sequence[XmlNode], parent: XmlNode, tag: str) -> Sequence[XmlNode]:
    if not items:
        raise VmapStructureError(
            f"At least one '{tag}' element is required", path=parent.path, missing=tag
        )
    return items


def _content(node: XmlNode | None) -> str | None:
    """CDATA if present, else text."""
    if node is None:
        return None
    return node.cdata if node.cdata is not None else node.text


# VMAP

def map_ad_breaks(vmap: XmlNode) -> tuple[AdBreak, ...]:
    """Map every ``AdBreak`` child of the VMAP root; at least one is required."""
    breaks = _require_items(normalize(vmap.get("AdBreak")), vmap, "AdBreak")
    return tuple(map_ad_break(node) for node in breaks)


def map_ad_break(node: XmlNode) -> AdBreak:
    extensions = node.optional_child("Extensions")
    return AdBreak(
        break_types=frozenset([node.require_attr("breakType")]),
        break_id=node.attr("breakId"),
        time_offset=node.require_attr("timeOffset"),
        ad_source=map_ad_source(node.child("AdSource")),
        extensions=map_extensions(extensions.get("Extension")) if extensions is not None else (),
        repeat_after=node.attr("repeatAfter"),
    )


def map_ad_source(node: XmlNode) -> AdSource:
    """Map an ``AdSource``; inline ``VASTAdData`` is required."""
    vast_ad_data = node.child("VASTAdData")
    ad_tag_uri = node.optional_child("AdTagURI")
    custom_ad_data = node.optional_child("CustomAdData")

    ad_data_type = None
    for payload in (vast_ad_data, ad_tag_uri, custom_ad_data):
        if payload is not None and payload.attr("templateType") is not None:
            ad_data_type = payload.attr("templateType")
            break

    return AdSource(
        id=node.attr("id"),
        vast_ad_data=map_vast(vast_ad_data.child("VAST")),
        ad_data_type=ad_data_type,
        ad_tag_uri=_content(ad_tag_uri),
        allow_multiple_ads=node.attr("allowMultipleAds"),
        data_type=node.attr("dataType"),
        follow_redirects=node.attr("followRedirects"),
        custom_ad_data=_content(custom_ad_data),
    )


# VAST

def map_vast(node: XmlNode) -> VastDocument:
    return VastDocument(version=node.attr("version"), ads=map_ads(node))


def map_ads(vast: XmlNode) -> tuple[InlineAd, ...]:
    """Map the ``Ad`` children of a ``VAST`` element.

    Raises:
        VmapUnsupportedAdError: If an ad is a Wrapper (or anything but InLine)
    """
    ads = _require_items(normalize(vast.get("Ad")), vast, "Ad")
    mapped = []
    for ad in ads:
        if not ad.has("InLine"):
            variant = "Wrapper" if ad.has("Wrapper") else None
            raise VmapUnsupportedAdError(
                f"Only InLine ads are supported, got {variant or 'no ad payload'}",
                path=ad.path,
                missing="InLine",
            )
        mapped.append(map_inline_ad(ad))
    return tuple(mapped)


def map_inline_ad(ad: XmlNode) -> InlineAd:
    """Map an ``Ad`` element carrying an ``InLine`` payload."""
    inline = ad.child("InLine")
    ad_system = inline.child("AdSystem")
    pricing = inline.child("Pricing")
    extensions = inline.optional_child("Extensions")
    survey = inline.optional_child("Survey")

    return InlineAd(
        id=ad.attr("id"),
        ad_system=AdSystem(name=ad_system.cdata, version=ad_system.attr("version")),
        ad_title=inline.child("AdTitle").cdata,
        extensions=map_extensions(extensions.get("Extension")) if extensions is not None else (),
        creatives=map_creatives(inline.child("Creatives").get("Creative"), inline),
        error=_text_or_none(inline, "Error"),
        sequence=_text_or_none(inline, "Sequence"),
        description=inline.child("Description").text,
        advertiser=_text_or_none(inline, "Advertiser"),
        pricing=Pricing(
            value=pricing.text,
            currency=pricing.attributes.get("currency") if pricing.attributes is not None else None,
            model=pricing.attributes.get("model") if pricing.attributes is not None else None,
        ),
        # text wins over CDATA
        survey=(survey.text or survey.cdata) if survey is not None else None,
        impressions=map_impressions(inline.get("Impression")),
    )


def _text_or_none(parent: XmlNode, tag: str) -> str | None:
    node = parent.optional_child(tag)
    return node.text if node is not None else None


# Creatives

def map_creatives(creatives: XmlNode | tuple[XmlNode, ...] | None, parent: XmlNode) -> tuple[Creative, ...]:
    """Map one or many ``Creative`` nodes; ``parent`` locates errors."""
    nodes = _require_items(normalize(creatives), parent, "Creative")
    return tuple(map_creative(node) for node in nodes)


def map_creative(node: XmlNode) -> Creative:
    linear = node.child("Linear")
    trackings = linear.optional_child("TrackingEvents")
    video_clicks = linear.optional_child("VideoClicks")
    media_files = linear.child("MediaFiles")

    return Creative(
        id=node.attr("id"),
        ad_id=node.attr("AdID") or node.attr("adId"),
        sequence=node.attr("sequence"),
        skip_offset=linear.attr("skipoffset"),
        trackings=map_tracking_events(trackings.get("Tracking")) if trackings is not None else (),
        video_clicks=map_video_clicks(video_clicks) if video_clicks is not None else VideoClicks(),
        extensions=node.get("CreativeExtensions"),
        media_files=tuple(
            _require_items(map_media_files(media_files.get("MediaFile")), media_files, "MediaFile")
        ),
        duration=_required_text(linear.child("Duration")),
    )


def _required_text(node: XmlNode) -> str:
    if node.text is None:
        raise VmapStructureError(
            f"Element '{node.tag}' has no text", path=node.path, missing="text()"
        )
    return node.text


def map_media_files(nodes: XmlNode | tuple[XmlNode, ...] | None) -> tuple[MediaFile, ...]:
    return tuple(
        MediaFile(
            id=node.attr("id"),
            height=node.attr("height"),
            width=node.attr("width"),
            delivery=node.attr("delivery"),
            codec=node.attr("codec"),
            mimetype=node.attr("type"),
            api_framework=node.attr("apiFramework"),
            bitrate=node.attr("bitrate"),
            min_bitrate=node.attr("minBitrate"),
            max_bitrate=node.attr("maxBitrate"),
            scalable=node.attr("scalable"),
            maintain_aspect_ratio=node.attr("maintainAspectRatio"),
            uri=node.cdata,
        )
        for node in normalize(nodes)
    )


def map_tracking_events(nodes: XmlNode | tuple[XmlNode, ...] | None) -> tuple[TrackingEvent, ...]:
    return tuple(
        TrackingEvent(uri=node.cdata, event=node.attr("event")) for node in normalize(nodes)
    )


def map_video_clicks(node: XmlNode) -> VideoClicks:
    """Map ``VideoClicks``; a field stays ``None`` when its element is absent."""
    click_through = node.optional_child("ClickThrough")
    return VideoClicks(
        click_through=_click_uri(click_through) if click_through is not None else None,
        click_trackings=_click_uris(node.get("ClickTracking")),
        custom_clicks=_click_uris(node.get("CustomClick")),
    )


def _click_uri(node: XmlNode) -> ClickUri:
    return ClickUri(uri=node.cdata, id=node.attr("id"))


def _click_uris(nodes: XmlNode | tuple[XmlNode, ...] | None) -> tuple[ClickUri, ...] | None:
    if nodes is None:
        return None
    return tuple(_click_uri(node) for node in normalize(nodes))


# Leaves

def map_extensions(nodes: XmlNode | tuple[XmlNode, ...] | None) -> tuple[Extension, ...]:
    return tuple(
        Extension(
            value=node.text,
            extension_type=node.attributes.get("type") if node.attributes is not None else None,
        )
        for node in normalize(nodes)
    )


def map_impressions(nodes: XmlNode | tuple[XmlNode, ...] | None) -> tuple[Impression, ...]:
    return tuple(Impression(uri=node.cdata) for node in normalize(nodes))


__all__ = [
    "map_ad_breaks",
    "map_ad_break",
    "map_ad_source",
    "map_vast",
    "map_ads",
    "map_inline_ad",
    "map_creatives",
    "map_creative",
    "map_media_files",
    "map_tracking_events",
    "map_video_clicks",
    "map_extensions",
    "map_impressions",
]
