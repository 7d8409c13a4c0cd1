from __future__ import annotations

import random
from typing import Final

from fake_useragent import UserAgent

from .logger import log

# Used only when fake-useragent cannot load its bundled data.
USER_AGENTS_POOL: Final[list[str]] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
]


def _pick_ua(browser: str | None = None, os: str | None = None) -> str:
    """Return a plausible desktop User-Agent string."""
    try:
        ua_src = UserAgent(
            browsers=[browser] if browser else None,
            os=[os] if os else None,
            platforms=["desktop"],
        )
        return ua_src.random
    except Exception as exc:  # noqa: BLE001
        log.debug("fake-useragent failed (%s) - using fallback UA", exc)
        return random.choice(USER_AGENTS_POOL)
