"""Choose one caption track for a language/region preference.

Most videos have no track for an arbitrary region, so selection degrades
instead of failing: exact locale, then language only, then the track the
player marks as default, then whatever is listed first.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .errors import NoCaptionsFound
from .logger import log
from .models import CaptionTrack

__all__ = ["select_track"]


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return (a or "").casefold() == (b or "").casefold()


def select_track(
    tracks: Sequence[CaptionTrack],
    language: str,
    region: Optional[str] = None,
) -> CaptionTrack:
    if not tracks:
        raise NoCaptionsFound("No caption tracks to choose from")

    if region:
        for track in tracks:
            if _same(track.language_code, language) and _same(track.region_code, region):
                log.debug("caption track %s: exact match", track.locale)
                return track

    for track in tracks:
        if _same(track.language_code, language):
            log.debug("caption track %s: language match", track.locale)
            return track

    for track in tracks:
        if track.is_default:
            log.debug("caption track %s: player default", track.locale)
            return track

    log.debug("caption track %s: first listed", tracks[0].locale)
    return tracks[0]
