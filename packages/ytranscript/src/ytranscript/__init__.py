"""Top-level package for ytranscript."""

from __future__ import annotations

from .chunker import chunk_into_blocks, filter_blocks
from .config import TranscriptConfig
from .core import fetch_transcript
from .errors import (
    CaptionParseError,
    InvalidReference,
    NetworkFailure,
    NoCaptionsFound,
    TranscriptError,
    TranscriptsDisabled,
    UnexpectedPageFormat,
    VideoUnavailable,
)
from .fetcher import FetchResponse, RequestsFetcher
from .formatters import EXT, FORMATS, render
from .locator import extract_caption_config, locate_captions
from .models import (
    CaptionConfig,
    CaptionTrack,
    TimedLine,
    TranscriptBlock,
    TranscriptDocument,
    VideoReference,
)
from .parser import fetch_caption_lines, parse_timed_text
from .reference import resolve_reference
from .selector import select_track
from .timestamps import format_offset

__all__ = [
    "fetch_transcript",
    "chunk_into_blocks",
    "filter_blocks",
    "format_offset",
    "resolve_reference",
    "extract_caption_config",
    "locate_captions",
    "select_track",
    "parse_timed_text",
    "fetch_caption_lines",
    "render",
    "EXT",
    "FORMATS",
    "TranscriptConfig",
    "FetchResponse",
    "RequestsFetcher",
    "VideoReference",
    "CaptionTrack",
    "CaptionConfig",
    "TimedLine",
    "TranscriptDocument",
    "TranscriptBlock",
    "TranscriptError",
    "InvalidReference",
    "VideoUnavailable",
    "TranscriptsDisabled",
    "NoCaptionsFound",
    "UnexpectedPageFormat",
    "CaptionParseError",
    "NetworkFailure",
]

__version__ = "0.1.0"
