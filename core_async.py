"""
core_async.py — Async Analysis Pipeline
─────────────────────────────────────────
submit URL → fetch page text → parse + extract → success / error state

The fetch is the only real suspension point. Parsing with BeautifulSoup
is CPU-bound, so it runs in a thread pool via asyncio.to_thread() to
keep the event loop free for other requests.

Where the page text comes from is pluggable:
  • LocalSource: fetch in-process with fetcher.fetch_document (default)
  • ProxySource: ask a remote /fetch-url proxy (set PROXY_URL)
"""

from __future__ import annotations
import asyncio
import logging
import time
from typing import Optional, Protocol

import httpx

import config
from fetcher import FetchError, FetchedPage, fetch_document
from seo.meta_extractor import extract_metadata
from session import AnalysisState

log = logging.getLogger("metalens")

FETCH_ERROR_PREFIX = "Failed to fetch URL: "


class ContentSource(Protocol):
    async def fetch(self, url: str) -> FetchedPage: ...


class LocalSource:
    """Fetch pages directly from this process."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def fetch(self, url: str) -> FetchedPage:
        return await fetch_document(url, transport=self.transport)


class ProxySource:
    """Fetch pages through a remote `GET /fetch-url?url=` proxy."""

    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url  = base_url.rstrip("/")
        self.transport = transport

    async def fetch(self, url: str) -> FetchedPage:
        try:
            async with httpx.AsyncClient(
                timeout=config.FETCH_TIMEOUT + 5,   # outlasts the proxy's own upstream timeout
                transport=self.transport,
            ) as client:
                response = await client.get(self.base_url + "/fetch-url", params={"url": url})
                data = response.json()
        except httpx.HTTPError as e:
            raise FetchError("Proxy unreachable: {}".format(e)) from e
        except ValueError as e:
            raise FetchError("Proxy returned a non-JSON response") from e
        if not isinstance(data, dict):
            raise FetchError("Proxy returned an unexpected payload")

        if response.status_code != 200:
            message = str(data.get("error") or "Proxy returned HTTP {}".format(response.status_code))
            raise FetchError(message.removeprefix(FETCH_ERROR_PREFIX))
        # the proxy reply carries no final address; the requested one stands in
        return FetchedPage(text=data.get("contents") or "", url=url)


def default_source() -> ContentSource:
    if config.PROXY_URL:
        return ProxySource(config.PROXY_URL)
    return LocalSource()


# ─────────────────────────────────────────────────────────────────────────────
# Main async entry point
# ─────────────────────────────────────────────────────────────────────────────

async def run_analysis_async(url: str, source: ContentSource,
                             state: Optional[AnalysisState] = None) -> AnalysisState:
    """
    Run one analysis and return the resulting state (success or error).

    `state` is the state being left behind; submitting while it is still
    loading raises AnalysisInProgress instead of starting a second fetch.
    """
    state = (state or AnalysisState.idle()).submit(url)
    log.info("Analysis started   url={}".format(url))
    t0 = time.time()

    # ── Step 1: fetch (network, non-blocking) ─────────────────────────────────
    try:
        page = await source.fetch(url)
    except Exception as e:
        log.warning("Fetch failed       url={}  error={}".format(url, e))
        return state.fail(FETCH_ERROR_PREFIX + str(e))

    # ── Step 2: parse + extract (CPU work → thread pool) ──────────────────────
    try:
        # relative links resolve against where the page was actually served from
        metadata = await asyncio.to_thread(extract_metadata, page.text, page.url)
    except Exception as e:
        log.exception("Extraction failed  url={}".format(url))
        return state.fail("Analysis failed: {}".format(e))

    log.info("Analysis complete  url={}  size={}  {:.0f}ms".format(
        url, len(page.text), (time.time() - t0) * 1000))
    return state.succeed(page.text, metadata)
