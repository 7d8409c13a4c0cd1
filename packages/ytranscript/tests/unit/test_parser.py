import pytest

from ytranscript.errors import CaptionParseError, NetworkFailure, TranscriptError
from ytranscript.fetcher import FetchResponse
from ytranscript.models import CaptionTrack, TimedLine
from ytranscript.parser import (
    clean_text,
    fetch_caption_lines,
    parse_timed_text,
    to_milliseconds,
)

from conftest import FakeFetch


def test_parses_classic_payload(caption_xml):
    lines = parse_timed_text(caption_xml)
    assert lines == (
        TimedLine("Hey there", 0, 1540),
        TimedLine("how are 'you' doing?", 1540, 4160),
        TimedLine("colored words", 5700, 2300),
        TimedLine("line break", 8000, 1000),
        TimedLine("last one", 61250, 3000),
    )
    assert isinstance(lines, tuple)


def test_document_order_is_preserved():
    xml = '<transcript><text start="5" dur="1">b</text><text start="1" dur="1">a</text></transcript>'
    assert [l.text for l in parse_timed_text(xml)] == ["b", "a"]


def test_parses_srv3_payload():
    xml = (
        '<?xml version="1.0" encoding="utf-8" ?><timedtext format="3"><body>'
        '<p t="1230" d="4500">Hello <s>there</s></p>'
        '<p t="5730" d="1000">&amp;amp; more</p>'
        "</body></timedtext>"
    )
    assert parse_timed_text(xml) == (
        TimedLine("Hello there", 1230, 4500),
        TimedLine("& more", 5730, 1000),
    )


def test_missing_offset_fails_whole_parse():
    xml = (
        "<transcript>"
        '<text start="0" dur="1">ok</text>'
        '<text dur="1">no start</text>'
        '<text start="2" dur="1">ok too</text>'
        "</transcript>"
    )
    with pytest.raises(CaptionParseError, match="start"):
        parse_timed_text(xml)


def test_missing_duration_defaults_to_zero():
    (line,) = parse_timed_text('<transcript><text start="3.5">x</text></transcript>')
    assert line == TimedLine("x", 3500, 0)


@pytest.mark.parametrize(
    "xml",
    [
        '<transcript><text start="abc" dur="1">x</text></transcript>',
        '<transcript><text start="-1" dur="1">x</text></transcript>',
        '<transcript><text start="1" dur="NaN">x</text></transcript>',
        '<transcript><text start="1" dur="">x</text></transcript>',
        '<transcript><text start="1e30" dur="1">x</text></transcript>',
        '<transcript><text start="1" dur="1e40">x</text></transcript>',
        "<timedtext><body><p t='9e99' d='1'>x</p></body></timedtext>",
        "<transcript><text start=",
        "<html><body>Sorry</body></html>",
        "<timedtext format='3'></timedtext>",
        "",
        "   \n",
    ],
)
def test_malformed_payloads(xml):
    with pytest.raises(CaptionParseError):
        parse_timed_text(xml)


def test_entity_expansion_is_refused():
    xml = (
        '<?xml version="1.0"?><!DOCTYPE t [<!ENTITY a "aaaa">]>'
        '<transcript><text start="0">&a;</text></transcript>'
    )
    with pytest.raises(CaptionParseError):
        parse_timed_text(xml)


def test_empty_text_entries_are_kept():
    xml = (
        "<transcript>"
        '<text start="0" dur="1">first</text>'
        '<text start="1" dur="1"></text>'
        '<text start="2" dur="1">&lt;i&gt;&lt;/i&gt;</text>'
        '<text start="3" dur="1">last</text>'
        "</transcript>"
    )
    lines = parse_timed_text(xml)
    assert [l.text for l in lines] == ["first", "", "", "last"]
    assert [l.offset_ms for l in lines] == [0, 1000, 2000, 3000]


def test_empty_transcript_element_is_valid():
    assert parse_timed_text("<transcript></transcript>") == ()


@pytest.mark.parametrize(
    "value, ms",
    [
        ("0", 0),
        ("1.54", 1540),
        ("1.2344", 1234),
        ("1.2345", 1235),
        ("0.0005", 1),
        ("0.0004", 0),
        ("12", 12000),
        (" 2.5 ", 2500),
    ],
)
def test_round_half_up(value, ms):
    assert to_milliseconds(value) == ms


def test_clean_text():
    assert clean_text("&lt;b&gt;Bold&lt;/b&gt;  and\n  &amp;quot;quoted&amp;quot;") == 'Bold and &quot;quoted&quot;'
    assert clean_text("Tom &amp; Jerry") == "Tom & Jerry"
    assert clean_text("<i>x</i>") == "x"
    assert clean_text("   ") == ""


@pytest.mark.asyncio
async def test_fetch_caption_lines(caption_xml):
    track = CaptionTrack("en", None, "https://www.youtube.com/api/timedtext?lang=en")
    fetch = FakeFetch({"timedtext": FetchResponse(200, caption_xml)})
    lines = await fetch_caption_lines(track, fetch)
    assert len(lines) == 5
    assert fetch.urls == [track.resource_url]


@pytest.mark.asyncio
async def test_fetch_caption_lines_http_error():
    track = CaptionTrack("en", None, "https://www.youtube.com/api/timedtext?lang=en")
    fetch = FakeFetch({"timedtext": FetchResponse(429, "slow down")})
    with pytest.raises(NetworkFailure) as info:
        await fetch_caption_lines(track, fetch, video_id="dQw4w9WgXcQ")
    assert info.value.status == 429
    assert info.value.video_id == "dQw4w9WgXcQ"


@pytest.mark.asyncio
async def test_fetch_caption_lines_tags_parse_errors_with_video_id():
    track = CaptionTrack("en", None, "https://www.youtube.com/api/timedtext?lang=en")
    fetch = FakeFetch({"timedtext": FetchResponse(200, "")})
    with pytest.raises(CaptionParseError) as info:
        await fetch_caption_lines(track, fetch, video_id="dQw4w9WgXcQ")
    assert info.value.video_id == "dQw4w9WgXcQ"
    assert isinstance(info.value, TranscriptError)
