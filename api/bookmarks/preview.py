"""
Link preview: Open Graph image/title for an external page.

The page is untrusted and may be slow, broken or hostile, so every fetch or
parse problem degrades to `{"ogImage": None, "title": None}` instead of an
error response. Only a missing/invalid `url` parameter is a 400.

The whole fetch (connect, redirects, body) runs under one deadline, and at
most `MAX_PAGE_BYTES` of the body are read; the tags we need live in
`<head>`.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any
from urllib.parse import urlsplit

import httpx

from core import config
from core.errors import InvalidRequest
from core.validation import is_http_url

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; TurbodocBot/1.0)"
MAX_PAGE_BYTES = 512 * 1024

_META_TAG_RE = re.compile(r"<meta\b([^>]*)>", re.IGNORECASE)
_ATTR_RE = re.compile(
    r"""([a-zA-Z_:][-a-zA-Z0-9_:.]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))""",
)
_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)


def _empty_preview() -> dict[str, Any]:
    return {"ogImage": None, "title": None}


def resolve_image_url(image: str, page_url: str) -> str:
    parts = urlsplit(page_url)
    if image.startswith("//"):
        return f"{parts.scheme}:{image}"
    if image.startswith("/"):
        return f"{parts.scheme}://{parts.netloc}{image}"
    return image


def _meta_attrs(attr_text: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(attr_text):
        value = next(v for v in m.group(2, 3, 4) if v is not None)
        attrs.setdefault(m.group(1).lower(), value)
    return attrs


def open_graph_tags(html: str) -> dict[str, str]:
    """
    First `content` per `og:*` key, whether the key is given as `property=`
    or `name=` and in any attribute order.
    """
    tags: dict[str, str] = {}
    for m in _META_TAG_RE.finditer(html):
        attrs = _meta_attrs(m.group(1))
        key = (attrs.get("property") or attrs.get("name") or "").strip().lower()
        content = (attrs.get("content") or "").strip()
        if key.startswith("og:") and content:
            tags.setdefault(key, content)
    return tags


def extract_preview(html: str, page_url: str) -> dict[str, Any]:
    og = open_graph_tags(html)

    og_image = og.get("og:image")
    title = og.get("og:title")
    if title is None:
        match = _TITLE_RE.search(html)
        if match:
            title = match.group(1).strip() or None

    return {
        "ogImage": resolve_image_url(og_image, page_url) if og_image else None,
        "title": title,
    }


async def _read_capped(resp: httpx.Response, limit: int) -> str:
    buf = bytearray()
    async for chunk in resp.aiter_bytes():
        buf.extend(chunk)
        if len(buf) >= limit:
            break
    return bytes(buf[:limit]).decode(resp.encoding or "utf-8", errors="replace")


async def _fetch_page(url: str, timeout_s: float) -> str | None:
    async with httpx.AsyncClient(timeout=timeout_s, follow_redirects=True) as client:
        async with client.stream("GET", url, headers={"User-Agent": USER_AGENT}) as resp:
            if not resp.is_success:
                logger.info("link_preview_non_ok url=%s status=%s", url, resp.status_code)
                return None
            return await _read_capped(resp, MAX_PAGE_BYTES)


async def fetch_preview(url: str | None) -> dict[str, Any]:
    url = (url or "").strip()
    if not url:
        raise InvalidRequest("URL parameter is required")
    if not is_http_url(url):
        raise InvalidRequest("Invalid URL format")

    timeout_s = config.link_preview_timeout_s()
    try:
        html = await asyncio.wait_for(_fetch_page(url, timeout_s), timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.info("link_preview_timeout url=%s timeout_s=%s", url, timeout_s)
        return _empty_preview()
    except Exception as exc:
        logger.info("link_preview_failed url=%s error=%s", url, exc.__class__.__name__)
        return _empty_preview()

    if html is None:
        return _empty_preview()
    return extract_preview(html, url)
