"""Unit tests for document consumer helpers."""

import pytest

from vmap_parser.helpers import (
    click_through_uri,
    iter_creatives,
    prepare_tracking_events,
    select_media_file,
)
from vmap_parser.parser import VmapParser


MEDIA_FILES = (
    '<MediaFile type="video/webm" bitrate="900"><![CDATA[https://cdn.example.com/a.webm]]></MediaFile>'
    '<MediaFile type="video/mp4" bitrate="3000"><![CDATA[https://cdn.example.com/hi.mp4]]></MediaFile>'
    '<MediaFile type="video/mp4" bitrate="1200"><![CDATA[https://cdn.example.com/lo.mp4]]></MediaFile>'
    '<MediaFile type="video/mp4">https://cdn.example.com/plain-text.mp4</MediaFile>'
)


@pytest.fixture
def document(make_vmap, make_vast, make_creative):
    creative = make_creative(
        media_files=MEDIA_FILES,
        trackings=(
            '<Tracking event="start"><![CDATA[https://t.example.com/start]]></Tracking>'
            '<Tracking event="start"><![CDATA[https://t2.example.com/start]]></Tracking>'
            '<Tracking event="complete"><![CDATA[https://t.example.com/complete]]></Tracking>'
        ),
        video_clicks='<VideoClicks><ClickThrough><![CDATA[https://brand.example.com]]></ClickThrough></VideoClicks>',
    )
    vast = make_vast(creatives=creative, inline_extra="<Error>https://t.example.com/error</Error>")
    return VmapParser().parse(make_vmap(break_count=2, vast=vast))


class TestHelpers:
    """Tests for helper functions."""

    def test_iter_creatives(self, document):
        triples = list(iter_creatives(document))
        assert len(triples) == 2
        assert [ad_break.break_id for ad_break, _, _ in triples] == ["break-1", "break-2"]

    def test_select_first_media_file(self, document):
        _, _, creative = next(iter_creatives(document))
        assert select_media_file(creative).uri == "https://cdn.example.com/a.webm"

    def test_select_media_file_by_mimetype(self, document):
        _, _, creative = next(iter_creatives(document))
        assert select_media_file(creative, mimetypes=["video/mp4"]).uri == "https://cdn.example.com/hi.mp4"

    def test_select_media_file_by_bitrate(self, document):
        _, _, creative = next(iter_creatives(document))
        media = select_media_file(creative, mimetypes=["video/mp4"], max_bitrate=2000)
        assert media.uri == "https://cdn.example.com/lo.mp4"

    def test_select_media_file_none_match(self, document):
        _, _, creative = next(iter_creatives(document))
        assert select_media_file(creative, mimetypes=["application/x-mpegURL"]) is None

    def test_prepare_tracking_events(self, document):
        _, ad, creative = next(iter_creatives(document))
        assert prepare_tracking_events(ad, creative) == {
            "start": ["https://t.example.com/start", "https://t2.example.com/start"],
            "complete": ["https://t.example.com/complete"],
            "impression": ["https://track.example.com/impression"],
            "error": ["https://t.example.com/error"],
        }

    def test_prepare_tracking_events_skips_cdata_error(self, make_vmap, make_vast):
        vast = make_vast(inline_extra="<Error><![CDATA[https://t.example.com/error]]></Error>")
        _, ad, creative = next(iter_creatives(VmapParser().parse(make_vmap(vast=vast))))
        assert ad.error is None
        assert prepare_tracking_events(ad, creative)["error"] == []

    def test_click_through_uri(self, document, make_vmap):
        _, _, creative = next(iter_creatives(document))
        assert click_through_uri(creative) == "https://brand.example.com"

        _, _, plain = next(iter_creatives(VmapParser().parse(make_vmap())))
        assert click_through_uri(plain) is None
