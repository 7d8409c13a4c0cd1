"""ytranscript.fetcher – the network capability the pipeline is given.

The pipeline only needs ``await fetch(url, headers) -> FetchResponse``.
:class:`RequestsFetcher` is the stock implementation: a ``requests.Session``
driven from a worker thread so the event loop never blocks.  Tests (or
callers with their own HTTP stack) pass any coroutine function with the same
shape instead.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Mapping, Optional, Protocol
from urllib.parse import urlparse, urlunparse

import requests
from youtube_transcript_api.proxies import GenericProxyConfig, WebshareProxyConfig

from .config import DEFAULT_TIMEOUT
from .errors import NetworkFailure
from .logger import log
from .user_agent import _pick_ua

__all__ = [
    "FetchResponse",
    "Fetch",
    "RequestsFetcher",
    "make_proxy",
]


@dataclass(frozen=True)
class FetchResponse:
    status: int
    body: str
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Fetch(Protocol):
    def __call__(
        self, url: str, headers: Optional[Mapping[str, str]] = None
    ) -> Awaitable[FetchResponse]: ...


def make_proxy(url: str) -> GenericProxyConfig | WebshareProxyConfig:
    """Return a ``GenericProxyConfig`` or ``WebshareProxyConfig`` for *url*."""
    if url.lower().startswith(("ws://", "webshare://")):
        creds = url.split("://", 1)[1]
        user, pwd = creds.split(":", 1)
        return WebshareProxyConfig(user, pwd)
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https"):
        http_url = urlunparse(parsed._replace(scheme="http"))
        https_url = urlunparse(parsed._replace(scheme="https"))
    else:
        http_url = https_url = url
    return GenericProxyConfig(http_url=http_url, https_url=https_url)


class RequestsFetcher:
    """Default :class:`Fetch` implementation backed by ``requests``.

    One instance owns one session; create one per concurrent pipeline if you
    want fully isolated cookies.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: str | GenericProxyConfig | WebshareProxyConfig | None = None,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent or _pick_ua()})
        # Skip the EU cookie-consent interstitial.
        self.session.cookies.set("CONSENT", "YES+1", domain=".youtube.com")
        if isinstance(proxy, str):
            proxy = make_proxy(proxy)
        if proxy is not None:
            self.session.proxies.update(proxy.to_requests_dict())

    def _get(self, url: str, headers: Optional[Mapping[str, str]]) -> FetchResponse:
        try:
            resp = self.session.get(url, headers=dict(headers or {}), timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            raise NetworkFailure(f"Request to {url} failed: {exc}", url=url) from exc
        log.debug("GET %s → %s (%d bytes)", url, resp.status_code, len(resp.content))
        if not resp.encoding or resp.encoding.lower() == "iso-8859-1":
            resp.encoding = "utf-8"
        return FetchResponse(resp.status_code, resp.text, resp.url)

    async def __call__(
        self, url: str, headers: Optional[Mapping[str, str]] = None
    ) -> FetchResponse:
        return await asyncio.to_thread(self._get, url, headers)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsFetcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
