from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from ytranscript.fetcher import FetchResponse  # noqa: E402

VIDEO_ID = "dQw4w9WgXcQ"

CAPTION_XML = """<?xml version="1.0" encoding="utf-8" ?><transcript>
<text start="0" dur="1.54">Hey there</text>
<text start="1.54" dur="4.16">how are &amp;#39;you&amp;#39; doing?</text>
<text start="5.7" dur="2.3">&lt;font color=&quot;#E5E5E5&quot;&gt;colored&lt;/font&gt; words</text>
<text start="8.0" dur="1.0">line
break</text>
<text start="61.25" dur="3">last one</text>
</transcript>"""


def track_json(code: str, *, kind: str | None = None, name: str | None = None) -> dict:
    raw: dict[str, Any] = {
        "baseUrl": f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang={code}",
        "name": {"simpleText": name or code},
        "vssId": ("a." if kind == "asr" else ".") + code,
        "languageCode": code,
        "isTranslatable": True,
    }
    if kind:
        raw["kind"] = kind
    return raw


def build_watch_page(
    tracks: list[dict] | None = None,
    *,
    title: str = "Demo video",
    status: str = "OK",
    reason: str | None = None,
    captions: bool = True,
    default_index: int | None = None,
) -> str:
    """Render a minimal watch page around a ytInitialPlayerResponse blob."""
    playability: dict[str, Any] = {"status": status}
    if reason:
        playability["reason"] = reason
    player: dict[str, Any] = {"playabilityStatus": playability}
    if captions:
        renderer: dict[str, Any] = {"captionTracks": tracks or []}
        if default_index is not None:
            renderer["audioTracks"] = [
                {"captionTrackIndices": [0], "defaultCaptionTrackIndex": default_index}
            ]
            renderer["defaultAudioTrackIndex"] = 0
        player["captions"] = {"playerCaptionsTracklistRenderer": renderer}
    player["videoDetails"] = {"videoId": VIDEO_ID, "title": title}
    blob = json.dumps(player)
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{title} - YouTube</title></head><body>"
        f"<script nonce=\"x\">var ytInitialPlayerResponse = {blob};"
        "var meta = document.createElement('meta');</script>"
        "</body></html>"
    )


class FakeFetch:
    """Scripted fetch capability: first URL-substring match wins."""

    def __init__(self, routes: dict[str, FetchResponse | Exception]):
        self.routes = routes
        self.calls: list[tuple[str, dict | None]] = []

    async def __call__(self, url, headers=None):
        self.calls.append((url, dict(headers) if headers else None))
        for key, resp in self.routes.items():
            if key in url:
                if isinstance(resp, Exception):
                    raise resp
                return resp
        return FetchResponse(404, "not found", url)

    @property
    def urls(self) -> list[str]:
        return [u for u, _ in self.calls]


@pytest.fixture
def caption_xml() -> str:
    return CAPTION_XML


@pytest.fixture
def watch_page() -> str:
    return build_watch_page([track_json("en"), track_json("de")], default_index=0)


@pytest.fixture
def fake_fetch(watch_page, caption_xml) -> FakeFetch:
    return FakeFetch(
        {
            "/watch?": FetchResponse(200, watch_page),
            "/api/timedtext": FetchResponse(200, caption_xml),
        }
    )
