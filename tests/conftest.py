"""Pytest configuration and shared fixtures for VMAP parser tests."""

import json
import sys
from pathlib import Path
from typing import Callable

import pytest


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vmap_parser.config import VmapParserConfig
from vmap_parser.parser import VmapParser


# ==================== XML Templates ====================

MEDIA_FILE_XML = (
    '<MediaFile id="mf-1" delivery="progressive" type="video/mp4" width="1280" height="720" '
    'bitrate="1500"><![CDATA[https://cdn.example.com/ad-720p.mp4]]></MediaFile>'
)

TRACKING_XML = '<Tracking event="start"><![CDATA[https://track.example.com/start]]></Tracking>'

LINEAR_TEMPLATE = """<Linear{linear_attrs}>
                <Duration>00:00:15</Duration>
                <TrackingEvents>{trackings}</TrackingEvents>
                {video_clicks}
                <MediaFiles>{media_files}</MediaFiles>
              </Linear>"""

INLINE_TEMPLATE = """<VAST version="3.0">
      <Ad id="{ad_id}">
        <InLine>
          <AdSystem version="2.1"><![CDATA[Test Ad Server]]></AdSystem>
          <AdTitle><![CDATA[Test Ad]]></AdTitle>
          <Description>Test description</Description>
          <Pricing model="CPM" currency="USD">1.00</Pricing>
          <Impression><![CDATA[https://track.example.com/impression]]></Impression>
          {inline_extra}
          <Creatives>{creatives}</Creatives>
        </InLine>
      </Ad>
    </VAST>"""

BREAK_TEMPLATE = """<vmap:AdBreak timeOffset="{time_offset}" breakType="linear" breakId="{break_id}">
    <vmap:AdSource id="{break_id}-source" allowMultipleAds="false" followRedirects="true">
      <vmap:VASTAdData>
        {vast}
      </vmap:VASTAdData>
    </vmap:AdSource>
  </vmap:AdBreak>"""

VMAP_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<vmap:VMAP xmlns:vmap="http://www.iab.net/videosuite/vmap"{version_attr}>
  {breaks}
</vmap:VMAP>"""


# ==================== Path Fixtures ====================


@pytest.fixture(scope="session")
def tests_dir() -> Path:
    """Get tests directory path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def fixtures_dir(tests_dir) -> Path:
    """Get fixtures directory path."""
    return tests_dir / "fixtures"


# ==================== Configuration Fixtures ====================


@pytest.fixture
def parser_config() -> VmapParserConfig:
    """Create default parser configuration."""
    return VmapParserConfig(
        recover_on_error=False,
        encoding="utf-8",
    )


@pytest.fixture
def vmap_parser(parser_config) -> VmapParser:
    """Create VMAP parser instance."""
    return VmapParser(config=parser_config)


# ==================== VMAP XML Builders ====================


@pytest.fixture
def make_creative() -> Callable[..., str]:
    """Build a ``<Creative>`` element with a linear payload."""

    def _make(
        media_files: str = MEDIA_FILE_XML,
        trackings: str = TRACKING_XML,
        video_clicks: str = "",
        attrs: str = ' id="creative-001" AdID="ad-id-001"',
        linear_attrs: str = "",
        extra: str = "",
    ) -> str:
        linear = LINEAR_TEMPLATE.format(
            linear_attrs=linear_attrs,
            trackings=trackings,
            video_clicks=video_clicks,
            media_files=media_files,
        )
        return f"<Creative{attrs}>{linear}{extra}</Creative>"

    return _make


@pytest.fixture
def make_vast(make_creative) -> Callable[..., str]:
    """Build a ``<VAST>`` element with one InLine ad."""

    def _make(creatives: str | None = None, inline_extra: str = "", ad_id: str = "ad-001") -> str:
        return INLINE_TEMPLATE.format(
            ad_id=ad_id,
            inline_extra=inline_extra,
            creatives=creatives if creatives is not None else make_creative(),
        )

    return _make


@pytest.fixture
def make_vmap(make_vast) -> Callable[..., str]:
    """Build a VMAP document with ``break_count`` ad breaks."""

    def _make(
        break_count: int = 1,
        vast: str | None = None,
        version: str | None = "1.0",
    ) -> str:
        breaks = "\n  ".join(
            BREAK_TEMPLATE.format(
                time_offset="start" if i == 0 else f"00:0{i}:00.000",
                break_id=f"break-{i + 1}",
                vast=vast if vast is not None else make_vast(),
            )
            for i in range(break_count)
        )
        version_attr = f' version="{version}"' if version is not None else ""
        return VMAP_TEMPLATE.format(version_attr=version_attr, breaks=breaks)

    return _make


@pytest.fixture
def minimal_vmap_xml(fixtures_dir) -> str:
    """Golden VMAP document with one break, ad, creative, media file, tracking and impression."""
    return (fixtures_dir / "minimal_vmap.xml").read_text(encoding="utf-8")


@pytest.fixture
def minimal_vmap_expected(fixtures_dir) -> dict:
    """Expected ``to_dict()`` of the golden document."""
    return json.loads((fixtures_dir / "minimal_vmap.expected.json").read_text(encoding="utf-8"))
