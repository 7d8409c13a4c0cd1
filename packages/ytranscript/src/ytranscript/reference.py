"""ytranscript.reference

Turn whatever the user pasted (watch link, short link, embed link, shorts
link, bare id) into a :class:`VideoReference`.  Pure string work, no network.
"""
from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from .errors import InvalidReference
from .models import VideoReference

__all__ = ["ID_RE", "resolve_reference", "is_video_id"]

ID_RE = re.compile(r"[A-Za-z0-9_-]{11}")

_HOSTS = ("youtube.com", "youtube-nocookie.com", "youtu.be")
# /embed/<id>, /v/<id>, /e/<id>, /shorts/<id>, /live/<id>
_PATH_RE = re.compile(r"^/(?:embed|v|e|shorts|live)/([A-Za-z0-9_-]{11})(?:[/?#]|$)")


def is_video_id(value: str) -> bool:
    return ID_RE.fullmatch(value) is not None


def _known_host(host: str) -> bool:
    host = host.lower().split(":", 1)[0]
    return any(host == h or host.endswith("." + h) for h in _HOSTS)


def resolve_reference(value: str) -> VideoReference:
    """Return the :class:`VideoReference` carried by *value*.

    Raises :class:`InvalidReference` when no id can be extracted.
    """
    raw = (value or "").strip()
    if is_video_id(raw):
        return VideoReference(raw)

    candidate = raw if "://" in raw else f"https://{raw}"
    parsed = urlparse(candidate)
    if not _known_host(parsed.netloc):
        raise InvalidReference(f"Not a YouTube link or video id: {value!r}")

    if parsed.netloc.lower().split(":", 1)[0].endswith("youtu.be"):
        vid = parsed.path.strip("/").split("/", 1)[0]
        if is_video_id(vid):
            return VideoReference(vid)
    else:
        for vid in parse_qs(parsed.query).get("v", []):
            if is_video_id(vid):
                return VideoReference(vid)
        if (m := _PATH_RE.match(parsed.path)):
            return VideoReference(m.group(1))

    raise InvalidReference(f"No video id found in {value!r}")
