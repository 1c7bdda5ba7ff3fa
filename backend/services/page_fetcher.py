"""Fetch a job posting page and reduce it to plain text."""

import logging
import re

import httpx
from bs4 import BeautifulSoup

from config import settings

logger = logging.getLogger(__name__)

_USER_AGENT = "Mozilla/5.0 (compatible; JobIntake/1.0)"
_NOISE_TAGS = "script, style, noscript, svg, iframe"
_WHITESPACE_RE = re.compile(r"\s+")


def html_to_text(html: str, max_chars: int | None = None) -> str:
    """Strip markup and collapse whitespace."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.select(_NOISE_TAGS):
        tag.decompose()
    text = _WHITESPACE_RE.sub(" ", soup.get_text(" ", strip=True)).strip()
    if max_chars is not None:
        text = text[:max_chars]
    return text


async def fetch_page_text(url: str) -> str | None:
    """Return the readable text of ``url``, or None if it cannot be fetched.

    At most ``settings.url_max_bytes`` of the body are read.
    """
    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            timeout=settings.url_fetch_timeout_seconds,
            headers={
                "User-Agent": _USER_AGENT,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            },
        ) as client:
            async with client.stream("GET", url) as response:
                response.raise_for_status()
                body = await _read_capped(response, settings.url_max_bytes)
                encoding = response.charset_encoding or "utf-8"
    except httpx.HTTPError as e:
        logger.warning("Failed to fetch %s: %s", url, e)
        return None

    try:
        html = body.decode(encoding, errors="replace")
    except LookupError:
        html = body.decode("utf-8", errors="replace")

    text = html_to_text(html, max_chars=settings.url_max_chars)
    logger.info("Fetched %s (%d bytes, %d chars of text)", url, len(body), len(text))
    return text or None


async def _read_capped(response: httpx.Response, max_bytes: int) -> bytes:
    chunks = []
    size = 0
    async for chunk in response.aiter_bytes():
        chunks.append(chunk)
        size += len(chunk)
        if size >= max_bytes:
            logger.debug("Stopped reading %s after %d bytes", response.url, size)
            break
    return b"".join(chunks)[:max_bytes]
