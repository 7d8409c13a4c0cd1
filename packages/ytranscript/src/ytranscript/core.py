"""ytranscript.core – the resolve → locate → select → fetch/parse pipeline.

Two sequential round trips per call (watch page, then caption payload); no
retries.  Any failure propagates as a :class:`~ytranscript.errors.TranscriptError`.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from .config import TranscriptConfig
from .fetcher import Fetch, RequestsFetcher
from .locator import locate_captions
from .logger import log
from .models import TranscriptDocument
from .parser import fetch_caption_lines
from .reference import resolve_reference
from .selector import select_track

__all__ = ["fetch_transcript"]


async def fetch_transcript(
    reference: str,
    config: Optional[TranscriptConfig] = None,
    *,
    fetch: Optional[Fetch] = None,
) -> TranscriptDocument:
    """Return the full transcript of the video behind *reference*.

    *fetch* defaults to a fresh :class:`RequestsFetcher` built from
    *config* and closed again before returning.
    """
    config = config or TranscriptConfig()
    video = resolve_reference(reference)

    own_fetcher: RequestsFetcher | None = None
    if fetch is None:
        # picking a user agent loads fake-useragent data from disk
        own_fetcher = await asyncio.to_thread(
            RequestsFetcher, timeout=config.timeout, proxy=config.proxy
        )
        fetch = own_fetcher

    try:
        log.info("Fetching caption tracks for %s", video)
        captions = await locate_captions(
            video, fetch, language=config.language, region=config.region
        )
        track = select_track(captions.tracks, config.language, config.region)
        log.info(
            "Using %s%s captions for %s",
            track.locale,
            " (auto-generated)" if track.is_auto_generated else "",
            video,
        )
        lines = await fetch_caption_lines(track, fetch, video_id=video.video_id)
    finally:
        if own_fetcher is not None:
            own_fetcher.close()

    return TranscriptDocument(
        title=captions.title or video.video_id,
        lines=lines,
        video=video,
        track=track,
    )
