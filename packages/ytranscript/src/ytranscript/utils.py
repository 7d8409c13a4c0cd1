"""ytranscript.utils

Small text helpers used by the exporters and the CLI.  Kept free of network
and YouTube specifics so they are trivial to unit-test.
"""
from __future__ import annotations

import re

__all__ = [
    "BAD_REGEX",
    "note_filename",
    "stats",
]

BAD_REGEX = re.compile(r'[\\/:*?"<>|]')


def note_filename(title: str, ext: str = "md") -> str:
    """File name for a transcript note titled *title*.

    Characters that are illegal in file names on common platforms become
    ``_``; the title is otherwise kept as-is.
    """
    stem = BAD_REGEX.sub("_", title).strip() or "untitled"
    return f"{stem}.{ext}" if ext else stem


def stats(txt: str) -> tuple[int, int, int]:
    """Return *(words, lines, chars)* exactly like the *nix `wc` tool."""
    chars = len(txt)
    words = len(re.findall(r"\S+", txt))
    lines = txt.count("\n")  # match `wc -l` semantics
    return words, lines, chars
