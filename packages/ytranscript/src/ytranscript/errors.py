"""ytranscript.errors – typed failures of the transcript pipeline.

Every stage raises one of these and lets it propagate; presenting the
message is the caller's business.
"""
from __future__ import annotations

__all__ = [
    "TranscriptError",
    "InvalidReference",
    "VideoUnavailable",
    "TranscriptsDisabled",
    "NoCaptionsFound",
    "UnexpectedPageFormat",
    "CaptionParseError",
    "NetworkFailure",
]


class TranscriptError(Exception):
    """Base class for all ytranscript errors."""

    def __init__(self, message: str, *, video_id: str | None = None):
        super().__init__(message)
        self.video_id = video_id


class InvalidReference(TranscriptError):
    """Input string did not contain a recognisable video id."""


class VideoUnavailable(TranscriptError):
    """Watch page reports the video as missing, private or unplayable."""


class TranscriptsDisabled(TranscriptError):
    """Captions are turned off for this video."""


class NoCaptionsFound(TranscriptError):
    """The player config lists zero caption tracks."""


class UnexpectedPageFormat(TranscriptError):
    """Watch page lacks the player blob (consent wall, bot check, layout change)."""


class CaptionParseError(TranscriptError):
    """Timed-text payload is not in the expected shape."""


class NetworkFailure(TranscriptError):
    """Transport-level failure or a non-2xx HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status: int | None = None,
        video_id: str | None = None,
    ):
        super().__init__(message, video_id=video_id)
        self.url = url
        self.status = status
