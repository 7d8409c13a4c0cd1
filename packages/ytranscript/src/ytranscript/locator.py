"""ytranscript.locator – find the caption tracks on a video's watch page.

The watch page is not a stable HTML tree, so the player configuration is
located by searching for the ``ytInitialPlayerResponse = {`` marker and
decoding the JSON object that follows.  All of that brittle text work sits
behind :func:`extract_caption_config`, which never touches the network.
"""
from __future__ import annotations

import html
import json
import re
from typing import Any, Iterable, Mapping

from .errors import (
    NetworkFailure,
    NoCaptionsFound,
    TranscriptsDisabled,
    UnexpectedPageFormat,
    VideoUnavailable,
)
from .fetcher import Fetch
from .logger import log
from .models import CaptionConfig, CaptionTrack, VideoReference

__all__ = [
    "BASE_URL",
    "UNAVAILABLE_STATUSES",
    "extract_caption_config",
    "locate_captions",
    "split_locale",
    "watch_page_request",
]

BASE_URL = "https://www.youtube.com"

UNAVAILABLE_STATUSES = frozenset(
    {"ERROR", "LOGIN_REQUIRED", "UNPLAYABLE", "CONTENT_CHECK_REQUIRED"}
)

_BLOB_RE = re.compile(r"ytInitialPlayerResponse\s*=\s*\{")
_STATUS_RE = re.compile(
    r'"playabilityStatus"\s*:\s*\{\s*"status"\s*:\s*"([A-Z_]+)"'
    r'(?:\s*,\s*"reason"\s*:\s*"((?:[^"\\]|\\.)*)")?'
)
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.S | re.I)

_decoder = json.JSONDecoder()


def split_locale(code: str) -> tuple[str, str | None]:
    """``"en-GB"`` → ``("en", "GB")``; ``"en"`` → ``("en", None)``."""
    lang, _, region = code.replace("_", "-").partition("-")
    return lang, (region or None)


def _text_of(node: Any) -> str:
    """Flatten YouTube's ``{"simpleText": …}`` / ``{"runs": [...]}`` labels."""
    if not isinstance(node, Mapping):
        return ""
    if "simpleText" in node:
        return str(node["simpleText"])
    return "".join(str(run.get("text", "")) for run in node.get("runs", []))


def _reason(status: re.Match) -> str:
    raw = status.group(2)
    if not raw:
        return status.group(1)
    try:
        return json.loads(f'"{raw}"')
    except json.JSONDecodeError:
        return raw


def _player_blob(body: str) -> dict | None:
    m = _BLOB_RE.search(body)
    if not m:
        return None
    try:
        blob, _ = _decoder.raw_decode(body, m.end() - 1)
    except json.JSONDecodeError:
        return None
    return blob if isinstance(blob, dict) else None


def _page_title(body: str, blob: Mapping[str, Any]) -> str:
    title = (blob.get("videoDetails") or {}).get("title")
    if title:
        return str(title)
    m = _TITLE_RE.search(body)
    if not m:
        return ""
    title = html.unescape(m.group(1)).rstrip().removesuffix(" - YouTube")
    return title.strip()


def _default_index(renderer: Mapping[str, Any]) -> int | None:
    audio = renderer.get("audioTracks") or []
    try:
        idx = int(renderer.get("defaultAudioTrackIndex", 0))
        return int(audio[idx]["defaultCaptionTrackIndex"])
    except (IndexError, KeyError, TypeError, ValueError):
        return None


def _tracks(renderer: Mapping[str, Any]) -> Iterable[CaptionTrack]:
    default_idx = _default_index(renderer)
    for i, raw in enumerate(renderer.get("captionTracks") or []):
        url = raw.get("baseUrl")
        code = raw.get("languageCode")
        if not url or not code:
            log.debug("skip caption track without url/language: %r", raw)
            continue
        if not url.startswith(("http://", "https://")):
            url = BASE_URL + ("" if url.startswith("/") else "/") + url
        lang, region = split_locale(code)
        yield CaptionTrack(
            language_code=lang,
            region_code=region,
            resource_url=html.unescape(url),
            is_auto_generated=raw.get("kind") == "asr"
            or str(raw.get("vssId", "")).startswith("a."),
            is_default=i == default_idx,
            name=_text_of(raw.get("name")),
        )


def extract_caption_config(page_body: str, *, video_id: str | None = None) -> CaptionConfig:
    """Return title and caption tracks found in a watch-page body.

    Diagnoses are checked in a fixed order so the most specific one wins:
    unavailable video, disabled captions, missing/undecodable player blob,
    empty track list.
    """
    label = f"video {video_id}" if video_id else "this video"
    status = _STATUS_RE.search(page_body)
    if status and status.group(1) in UNAVAILABLE_STATUSES:
        raise VideoUnavailable(
            f"The {label} is unavailable: {_reason(status)}", video_id=video_id
        )

    if status and '"captions":' not in page_body:
        raise TranscriptsDisabled(
            f"Transcripts are disabled for {label}", video_id=video_id
        )

    blob = _player_blob(page_body)
    if blob is None:
        raise UnexpectedPageFormat(
            "Watch page did not contain the player configuration "
            "(consent page or bot check?)",
            video_id=video_id,
        )

    renderer = (blob.get("captions") or {}).get("playerCaptionsTracklistRenderer")
    if renderer is None:
        raise TranscriptsDisabled(
            f"Transcripts are disabled for {label}", video_id=video_id
        )

    tracks = tuple(_tracks(renderer))
    if not tracks:
        raise NoCaptionsFound(
            f"No caption tracks listed for {label}", video_id=video_id
        )
    return CaptionConfig(title=_page_title(page_body, blob), tracks=tracks)


def watch_page_request(
    video: VideoReference, *, language: str, region: str | None
) -> tuple[str, dict[str, str]]:
    """URL and headers for the watch page, carrying the locale as a hint."""
    url = f"{video.watch_url}&hl={language}"
    if region:
        accept = f"{language}-{region},{language};q=0.9"
    else:
        accept = language
    return url, {"Accept-Language": accept}


async def locate_captions(
    video: VideoReference,
    fetch: Fetch,
    *,
    language: str,
    region: str | None = None,
) -> CaptionConfig:
    """Fetch the watch page of *video* and extract its caption config."""
    url, headers = watch_page_request(video, language=language, region=region)
    resp = await fetch(url, headers)
    if not resp.ok:
        raise NetworkFailure(
            f"Watch page for {video} returned HTTP {resp.status}",
            url=url,
            status=resp.status,
            video_id=video.video_id,
        )
    config = extract_caption_config(resp.body, video_id=video.video_id)
    log.debug(
        "%s: %d caption track(s): %s",
        video,
        len(config.tracks),
        ", ".join(t.locale for t in config.tracks),
    )
    return config
