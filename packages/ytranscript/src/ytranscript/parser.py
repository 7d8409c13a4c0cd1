"""ytranscript.parser – timed-text payload → ordered :class:`TimedLine` tuple.

Two payload flavours are understood:

* the classic one served by a track's ``baseUrl``::

      <transcript><text start="1.23" dur="4.5">Hello &amp;amp; bye</text></transcript>

  offsets in fractional seconds;

* ``fmt=srv3``::

      <timedtext format="3"><body><p t="1230" d="4500">Hello</p></body></timedtext>

  offsets in whole milliseconds.

Seconds are converted with round-half-up on exact decimals, so ``"0.0005"``
becomes 1 ms and ``"1.2344"`` becomes 1234 ms.  Lines whose text is empty
after cleaning are kept: they still mark a point in time.
"""
from __future__ import annotations

import html
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional

from defusedxml import DefusedXmlException
from defusedxml import ElementTree

from .errors import CaptionParseError, NetworkFailure
from .fetcher import Fetch
from .logger import log
from .models import CaptionTrack, TimedLine

__all__ = [
    "parse_timed_text",
    "fetch_caption_lines",
    "clean_text",
    "to_milliseconds",
]

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")
_MS = Decimal(1000)
_ONE = Decimal(1)


def clean_text(raw: str) -> str:
    """Decode entities, drop inline markup, collapse whitespace."""
    text = html.unescape(raw)
    text = _TAG_RE.sub("", text)
    return _WS_RE.sub(" ", text).strip()


def to_milliseconds(value: str, *, scale: Decimal = _MS) -> int:
    """``"1.2345"`` → 1235 (seconds, round-half-up); raises ``ValueError``."""
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        raise ValueError(f"not a number: {value!r}") from None
    if not number.is_finite() or number < 0:
        raise ValueError(f"not a non-negative finite number: {value!r}")
    try:
        return int((number * scale).quantize(_ONE, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValueError(f"out of range: {value!r}") from None


def _line(elem, index: int, start_attr: str, dur_attr: str, scale: Decimal) -> TimedLine:
    start = elem.get(start_attr)
    if start is None:
        raise CaptionParseError(
            f"Caption entry #{index} has no '{start_attr}' attribute"
        )
    try:
        offset = to_milliseconds(start, scale=scale)
        dur = elem.get(dur_attr)
        duration = to_milliseconds(dur, scale=scale) if dur is not None else 0
    except ValueError as exc:
        raise CaptionParseError(f"Caption entry #{index}: {exc}") from exc
    return TimedLine(
        text=clean_text("".join(elem.itertext())),
        offset_ms=offset,
        duration_ms=duration,
    )


def _entries(root) -> tuple[Iterable, str, str, Decimal]:
    if root.tag == "transcript":
        return root.findall("text"), "start", "dur", _MS
    if root.tag == "timedtext":
        body = root.find("body")
        if body is None:
            raise CaptionParseError("timedtext payload has no <body>")
        return body.iter("p"), "t", "d", _ONE
    raise CaptionParseError(f"Unexpected caption payload root <{root.tag}>")


def parse_timed_text(payload: str) -> tuple[TimedLine, ...]:
    """Parse *payload* completely or raise :class:`CaptionParseError`."""
    if not payload or not payload.strip():
        raise CaptionParseError("Caption payload is empty")
    try:
        root = ElementTree.fromstring(payload)
    except (ElementTree.ParseError, DefusedXmlException) as exc:
        raise CaptionParseError(f"Caption payload is not well-formed XML: {exc}") from exc

    entries, start_attr, dur_attr, scale = _entries(root)
    return tuple(
        _line(elem, i, start_attr, dur_attr, scale) for i, elem in enumerate(entries)
    )


async def fetch_caption_lines(
    track: CaptionTrack, fetch: Fetch, *, video_id: Optional[str] = None
) -> tuple[TimedLine, ...]:
    """Download the payload behind *track* and parse it."""
    resp = await fetch(track.resource_url, None)
    if not resp.ok:
        raise NetworkFailure(
            f"Caption track {track.locale} returned HTTP {resp.status}",
            url=track.resource_url,
            status=resp.status,
            video_id=video_id,
        )
    try:
        lines = parse_timed_text(resp.body)
    except CaptionParseError as exc:
        exc.video_id = exc.video_id or video_id
        raise
    log.debug("parsed %d caption line(s) from %s track", len(lines), track.locale)
    return lines
