"""Group timed lines into display blocks, one timestamp per *stride* lines."""
from __future__ import annotations

from typing import Iterable, Sequence, Union

from .models import TimedLine, TranscriptBlock, TranscriptDocument

__all__ = ["chunk_into_blocks", "filter_blocks"]


def chunk_into_blocks(
    source: Union[TranscriptDocument, Sequence[TimedLine]],
    stride: int,
) -> list[TranscriptBlock]:
    """Merge every *stride* consecutive lines into one :class:`TranscriptBlock`.

    A block's offset is the offset of its first line and its quote is the
    line texts joined by single spaces, so ``len(result) == ceil(N / stride)``.
    """
    if stride < 1:
        raise ValueError(f"stride must be >= 1, got {stride}")
    lines = source.lines if isinstance(source, TranscriptDocument) else source

    blocks: list[TranscriptBlock] = []
    parts: list[str] = []
    offset = 0
    for i, line in enumerate(lines):
        if i % stride == 0:
            if i > 0:
                blocks.append(TranscriptBlock(" ".join(parts), offset))
                parts = []
            offset = line.offset_ms
        parts.append(line.text)

    if parts:
        blocks.append(TranscriptBlock(" ".join(parts), offset))
    return blocks


def filter_blocks(blocks: Iterable[TranscriptBlock], query: str) -> list[TranscriptBlock]:
    """Blocks whose quote contains *query*, ignoring case.  Blank → all."""
    needle = (query or "").strip().casefold()
    if not needle:
        return list(blocks)
    return [b for b in blocks if needle in b.quote.casefold()]
