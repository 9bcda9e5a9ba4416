"""Helper functions for consumers of a parsed VMAP document."""

from typing import Iterable, Iterator

from .models import AdBreak, Creative, InlineAd, MediaFile, VmapDocument


def iter_creatives(document: VmapDocument) -> Iterator[tuple[AdBreak, InlineAd, Creative]]:
    """
    Walk every creative of a document in document order.

    Args:
        document: Parsed VMAP document

    Yields:
        tuple: ``(ad_break, ad, creative)`` for each creative
    """
    for ad_break in document.breaks:
        for ad in ad_break.ad_source.vast_ad_data.ads:
            for creative in ad.creatives:
                yield ad_break, ad, creative


def select_media_file(
    creative: Creative,
    mimetypes: Iterable[str] | None = None,
    max_bitrate: int | None = None,
) -> MediaFile | None:
    """
    Pick the first playable media file of a creative.

    Args:
        creative: Creative to choose from
        mimetypes: Accepted MIME types; any type when omitted
        max_bitrate: Highest acceptable bitrate in kbps; files without a
            numeric bitrate are accepted

    Returns:
        MediaFile | None: First matching file with a URI, None otherwise

    Examples:
        >>> media = select_media_file(creative, mimetypes=["video/mp4"], max_bitrate=2000)
        >>> media.uri if media else None
        'https://cdn.example.com/ad-1500k.mp4'
    """
    accepted = set(mimetypes) if mimetypes is not None else None
    for media in creative.media_files:
        if not media.uri:
            continue
        if accepted is not None and media.mimetype not in accepted:
            continue
        if max_bitrate is not None and _bitrate(media) > max_bitrate:
            continue
        return media
    return None


def _bitrate(media: MediaFile) -> float:
    try:
        return float(media.bitrate) if media.bitrate else 0
    except ValueError:
        return 0


def prepare_tracking_events(ad: InlineAd, creative: Creative) -> dict[str, list[str]]:
    """
    Group a creative's beacon URIs by trigger name.

    Impression URIs of the ad are added under ``impression`` and its error
    URI, if any, under ``error``. ``InlineAd.error`` is read from the text of
    the ``Error`` element, so an error URI given only as CDATA maps to
    ``None`` and the ``error`` list stays empty.

    Args:
        ad: Ad owning the creative
        creative: Creative whose tracking events are collected

    Returns:
        dict: Event names mapped to tracking URIs in document order
    """
    tracking_events: dict[str, list[str]] = {}
    for tracking in creative.trackings:
        if tracking.event and tracking.uri:
            tracking_events.setdefault(tracking.event, []).append(tracking.uri)
    tracking_events["impression"] = [imp.uri for imp in ad.impressions if imp.uri]
    tracking_events["error"] = [ad.error] if ad.error else []
    return tracking_events


def click_through_uri(creative: Creative) -> str | None:
    """Return the creative's click-through URI, if it has one."""
    click_through = creative.video_clicks.click_through
    return click_through.uri if click_through is not None else None


__all__ = [
    "iter_creatives",
    "select_media_file",
    "prepare_tracking_events",
    "click_through_uri",
]
