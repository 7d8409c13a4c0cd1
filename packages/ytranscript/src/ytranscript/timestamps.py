"""Millisecond offsets → ``M:SS`` / ``H:MM:SS`` display strings."""
from __future__ import annotations

__all__ = ["format_offset"]


def format_offset(ms: int) -> str:
    """Return *ms* as ``H:MM:SS`` (when ≥ 1 h) or ``M:SS``.

    Fractions of a second are truncated.  Callers guarantee a non-negative
    integral value; nothing is validated here.
    """
    total = int(ms) // 1000
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
