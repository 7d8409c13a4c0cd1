"""ytranscript.formatters – render a :class:`TranscriptDocument` for export.

Line-based formats (srt, webvtt, text, pretty) reuse the youtube-transcript-api
formatter classes; block-based formats (markdown, links) render the output of
:func:`~ytranscript.chunker.chunk_into_blocks`.
"""
from __future__ import annotations

import json
from typing import Callable, Optional, Sequence

from youtube_transcript_api import FetchedTranscriptSnippet
from youtube_transcript_api import formatters as yt_fmt

from .chunker import chunk_into_blocks, filter_blocks
from .config import DEFAULT_STRIDE
from .models import TimedLine, TranscriptBlock, TranscriptDocument, VideoReference
from .timestamps import format_offset
from .utils import stats

__all__ = [
    "TimeStampedText",
    "FMT",
    "EXT",
    "BLOCK_FORMATS",
    "FORMATS",
    "render",
    "render_markdown",
    "render_links",
    "to_snippets",
]


class TimeStampedText(yt_fmt.TextFormatter):
    """Plain formatter that can prefix each line with ``[M:SS]``."""

    def __init__(self, show: bool = False):
        super().__init__()
        self.show = show

    def format_transcript(self, transcript, **kw):  # type: ignore[override]
        if not self.show:
            return super().format_transcript(transcript, **kw)
        return "\n".join(
            f"[{format_offset(round(c.start * 1000))}] {c.text}" for c in transcript
        )


FMT = {
    "srt": yt_fmt.SRTFormatter(),
    "webvtt": yt_fmt.WebVTTFormatter(),
    "text": TimeStampedText(),
    "pretty": TimeStampedText(show=True),
}

EXT = {
    "markdown": "md",
    "links": "md",
    "json": "json",
    "srt": "srt",
    "webvtt": "vtt",
    "text": "txt",
    "pretty": "txt",
}

BLOCK_FORMATS = frozenset({"markdown", "links"})
FORMATS = tuple(EXT)


def to_snippets(lines: Sequence[TimedLine]) -> list[FetchedTranscriptSnippet]:
    """Adapt timed lines to the cue objects the library formatters expect."""
    return [
        FetchedTranscriptSnippet(
            text=line.text,
            start=line.offset_ms / 1000,
            duration=line.duration_ms / 1000,
        )
        for line in lines
    ]


def _source_url(doc: TranscriptDocument) -> str:
    return doc.video.watch_url if doc.video else ""


def _link(video: Optional[VideoReference], block: TranscriptBlock) -> str:
    stamp = format_offset(block.quote_time_offset_ms)
    if video is None:
        return stamp
    return f"[{stamp}]({video.link_at(block.quote_time_offset_ms)})"


def render_markdown(doc: TranscriptDocument, blocks: Sequence[TranscriptBlock]) -> str:
    """Note body: source link plus a collapsed transcript callout."""
    url = _source_url(doc)
    out = [f"[{url}]({url})", ""] if url else []
    out += ["## Transcript", "", "> [!faq]- Transcript Content"]
    for block in blocks:
        out.append(f"> **[{format_offset(block.quote_time_offset_ms)}]** {block.quote}")
        out.append(">")
    return "\n".join(out) + "\n"


def render_links(doc: TranscriptDocument, blocks: Sequence[TranscriptBlock]) -> str:
    """Paste-ready blocks, each led by a timestamp linking into the video."""
    return "\n\n".join(f"{_link(doc.video, b)} {b.quote}" for b in blocks) + "\n"


def _render_json(doc: TranscriptDocument) -> str:
    payload = {
        "video_id": doc.video.video_id if doc.video else None,
        "title": doc.title,
        "url": _source_url(doc),
        "language": doc.track.locale if doc.track else None,
        "auto_generated": doc.track.is_auto_generated if doc.track else None,
        "lines": [
            {"text": l.text, "offset_ms": l.offset_ms, "duration_ms": l.duration_ms}
            for l in doc.lines
        ],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def _meta(doc: TranscriptDocument) -> list[tuple[str, str]]:
    meta = [("title", doc.title)]
    if doc.video:
        meta += [("video-id", doc.video.video_id), ("url", doc.video.watch_url)]
    if doc.track:
        meta.append(("language", doc.track.locale))
    return meta


def _with_header(fmt: str, body: str, doc: TranscriptDocument) -> str:
    w, l, c = stats(body)
    meta = _meta(doc)
    if fmt == "markdown":
        front = ["---"]
        front += [f"{k}: {json.dumps(v, ensure_ascii=False)}" for k, v in meta]
        front += [f"words: {w}", f"lines: {l}", f"chars: {c}", "---", ""]
        return "\n".join(front) + "\n" + body
    pre = "NOTE " if fmt in ("srt", "webvtt") else "# "
    lines = [f"{pre}{k}: {v}" for k, v in meta]
    lines.append(f"{pre}stats: {w:,} words · {l:,} lines · {c:,} chars")
    header = "\n".join(lines) + "\n\n"
    if fmt == "webvtt":
        # cue file must still open with the signature line
        head, _, rest = body.partition("\n\n")
        return f"{head}\n\n{header}{rest}"
    return header + body


_BLOCK_RENDERERS: dict[str, Callable[[TranscriptDocument, Sequence[TranscriptBlock]], str]] = {
    "markdown": render_markdown,
    "links": render_links,
}


def render(
    doc: TranscriptDocument,
    fmt: str,
    *,
    stride: int = DEFAULT_STRIDE,
    query: Optional[str] = None,
    include_header: bool = False,
) -> str:
    """Render *doc* as *fmt* (one of :data:`FORMATS`).

    *query* filters blocks and only applies to :data:`BLOCK_FORMATS`.
    Headers are never added to ``json`` or ``links`` output.
    """
    if fmt not in EXT:
        raise ValueError(f"unknown format {fmt!r}; choose from {', '.join(FORMATS)}")

    if fmt in BLOCK_FORMATS:
        blocks = filter_blocks(chunk_into_blocks(doc, stride), query or "")
        body = _BLOCK_RENDERERS[fmt](doc, blocks)
    elif fmt == "json":
        return _render_json(doc)
    else:
        body = FMT[fmt].format_transcript(to_snippets(doc.lines))
        if not body.endswith("\n"):
            body += "\n"

    if include_header and fmt != "links":
        return _with_header(fmt, body, doc)
    return body
