"""
fetcher.py — Outbound page fetcher
───────────────────────────────────
The only place that talks to the outside web.

Uses `httpx.AsyncClient` so a slow upstream never blocks the event loop.
The body is streamed and abandoned as soon as it grows past
MAX_CONTENT_BYTES, and the whole request is bounded by FETCH_TIMEOUT.

Every failure (DNS, refused connection, timeout, non-2xx status,
oversized body, malformed URL) surfaces as a single FetchError with
a readable message; callers never need to know which one it was.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

import config

log = logging.getLogger("metalens")

HEADERS = {
    "User-Agent":      "Mozilla/5.0 (compatible; MetaLensBot/1.0)",
    "Accept":          "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class FetchError(Exception):
    """Raised when a page could not be retrieved for any reason."""


@dataclass(frozen=True)
class FetchedPage:
    text: str
    url:  str   # final address, after any redirects


async def fetch_document(
    url: str,
    *,
    timeout: Optional[float] = None,
    max_bytes: Optional[int] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FetchedPage:
    """
    GET `url` and return the body as text (whatever its content type)
    together with the address it was finally served from.

    Redirects are followed. `transport` lets tests plug in an
    `httpx.MockTransport` instead of the network.
    """
    timeout   = config.FETCH_TIMEOUT if timeout is None else timeout
    max_bytes = config.MAX_CONTENT_BYTES if max_bytes is None else max_bytes

    try:
        async with httpx.AsyncClient(
            headers=HEADERS,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        ) as client:
            async with client.stream("GET", url) as response:
                if not response.is_success:
                    raise FetchError("HTTP error! status: {} {}".format(
                        response.status_code, response.reason_phrase).strip())

                body = bytearray()
                async for chunk in response.aiter_bytes():
                    body.extend(chunk)
                    if len(body) > max_bytes:
                        raise FetchError(
                            "Response body exceeds {} bytes".format(max_bytes))

                return FetchedPage(text=_decode(body, response.encoding),
                                   url=str(response.url))

    except httpx.TimeoutException:
        raise FetchError("Request timed out after {:g}s".format(timeout))
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(str(e) or e.__class__.__name__) from e


async def fetch_page(url: str, **kwargs) -> str:
    """Same as fetch_document, body text only."""
    return (await fetch_document(url, **kwargs)).text


def _decode(body: bytes, encoding: Optional[str]) -> str:
    # some registered codecs (rot13, base64, ...) are not text encodings
    try:
        return body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        log.info("Unusable charset {!r}, decoding as utf-8".format(encoding))
        return body.decode("utf-8", errors="replace")
