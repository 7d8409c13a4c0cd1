"""Immutable value types shared by every pipeline stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

__all__ = [
    "WATCH_URL",
    "VideoReference",
    "CaptionTrack",
    "CaptionConfig",
    "TimedLine",
    "TranscriptDocument",
    "TranscriptBlock",
]

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


@dataclass(frozen=True)
class VideoReference:
    """Canonical 11-character video id."""

    video_id: str

    def __str__(self) -> str:
        return self.video_id

    @property
    def watch_url(self) -> str:
        return WATCH_URL.format(video_id=self.video_id)

    @property
    def short_url(self) -> str:
        return f"https://youtu.be/{self.video_id}"

    def link_at(self, offset_ms: int) -> str:
        """Watch URL that starts playback at *offset_ms* (whole seconds)."""
        return f"{self.watch_url}&t={offset_ms // 1000}"


@dataclass(frozen=True)
class CaptionTrack:
    language_code: str
    region_code: Optional[str]
    resource_url: str
    is_auto_generated: bool = False
    is_default: bool = False
    name: str = ""

    @property
    def locale(self) -> str:
        if self.region_code:
            return f"{self.language_code}-{self.region_code}"
        return self.language_code


@dataclass(frozen=True)
class CaptionConfig:
    """What the watch page tells us about captions: title plus tracks."""

    title: str
    tracks: Tuple[CaptionTrack, ...] = ()


@dataclass(frozen=True)
class TimedLine:
    text: str
    offset_ms: int
    duration_ms: int = 0

    @property
    def end_ms(self) -> int:
        return self.offset_ms + self.duration_ms


@dataclass(frozen=True)
class TranscriptDocument:
    """Title plus every timed line of one caption track, in document order."""

    title: str
    lines: Tuple[TimedLine, ...] = ()
    video: Optional[VideoReference] = None
    track: Optional[CaptionTrack] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Callers may hand in a list; the document itself must stay immutable.
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def text(self) -> str:
        """Plain concatenated transcript, e.g. for a summarisation service."""
        return " ".join(line.text for line in self.lines)


@dataclass(frozen=True)
class TranscriptBlock:
    quote: str
    quote_time_offset_ms: int
