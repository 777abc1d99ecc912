import asyncio
import time

import httpx
import pytest

from bookmarks import preview

PAGE_URL = "https://example.com/articles/1"


class DripStream(httpx.AsyncByteStream):
    """Response body that never ends: `head`, then `chunk` every `delay` seconds."""

    def __init__(self, head=b"", chunk=b"x", delay=0.0):
        self.head = head
        self.chunk = chunk
        self.delay = delay
        self.sent = 0

    async def __aiter__(self):
        if self.head:
            self.sent += len(self.head)
            yield self.head
        while True:
            await asyncio.sleep(self.delay)
            self.sent += len(self.chunk)
            yield self.chunk

    async def aclose(self):
        pass


def _serve(monkeypatch, *, status=200, text="", exc=None, stream=None):
    seen = {}

    async def fake_send(self, request, **kwargs):
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        if exc is not None:
            raise exc
        if stream is not None:
            return httpx.Response(status, stream=stream, request=request)
        return httpx.Response(status, text=text, request=request)

    monkeypatch.setattr(httpx.AsyncClient, "send", fake_send)
    return seen


def test_extract_preview_prefers_og_tags():
    html = (
        '<html><head><title>Plain</title>'
        '<meta property="og:title" content="OG Title">'
        '<meta property="og:image" content="https://cdn.example.com/a.png">'
        "</head></html>"
    )

    assert preview.extract_preview(html, PAGE_URL) == {
        "ogImage": "https://cdn.example.com/a.png",
        "title": "OG Title",
    }


@pytest.mark.parametrize(
    "tag",
    [
        '<meta content="/cover.png" property="og:image">',
        "<meta name='og:image' content='/cover.png' />",
        '<META PROPERTY="OG:IMAGE" CONTENT="/cover.png">',
        '<meta data-x="1" content=/cover.png property=og:image>',
    ],
)
def test_extract_preview_accepts_attribute_variants(tag):
    result = preview.extract_preview(f"<head>{tag}</head>", PAGE_URL)

    assert result["ogImage"] == "https://example.com/cover.png"


def test_extract_preview_falls_back_to_title_element():
    html = "<html><head><title>  Just a title </title></head></html>"

    assert preview.extract_preview(html, PAGE_URL) == {"ogImage": None, "title": "Just a title"}


def test_extract_preview_ignores_empty_og_content():
    html = '<meta property="og:title" content=""><title>Fallback</title>'

    assert preview.extract_preview(html, PAGE_URL)["title"] == "Fallback"


@pytest.mark.parametrize(
    "image, expected",
    [
        ("//cdn.example.com/x.png", "https://cdn.example.com/x.png"),
        ("/static/x.png", "https://example.com/static/x.png"),
        ("https://other.test/x.png", "https://other.test/x.png"),
    ],
)
def test_resolve_image_url(image, expected):
    assert preview.resolve_image_url(image, PAGE_URL) == expected


def test_og_image_endpoint(client, monkeypatch):
    seen = _serve(
        monkeypatch,
        text='<meta property="og:image" content="/img/cover.jpg"><title>Cover</title>',
    )

    res = client.get("/v1/bookmarks/og-image", params={"url": PAGE_URL})

    assert res.status_code == 200
    assert res.json() == {"ogImage": "https://example.com/img/cover.jpg", "title": "Cover"}
    assert seen["url"] == PAGE_URL
    assert seen["headers"]["User-Agent"] == preview.USER_AGENT


def test_og_image_non_success_status_degrades(client, monkeypatch):
    _serve(monkeypatch, status=503, text="<title>Down</title>")

    res = client.get("/v1/bookmarks/og-image", params={"url": PAGE_URL})

    assert res.status_code == 200
    assert res.json() == {"ogImage": None, "title": None}


def test_og_image_fetch_error_degrades(client, monkeypatch):
    _serve(monkeypatch, exc=httpx.ConnectTimeout("slow"))

    res = client.get("/v1/bookmarks/og-image", params={"url": PAGE_URL})

    assert res.status_code == 200
    assert res.json() == {"ogImage": None, "title": None}


@pytest.mark.asyncio
async def test_slow_drip_page_is_cut_off_by_total_deadline(monkeypatch):
    monkeypatch.setenv("LINK_PREVIEW_TIMEOUT_S", "0.5")
    # Each chunk arrives well inside a per-read timeout, but the body never ends.
    _serve(monkeypatch, stream=DripStream(head=b"<html><head>", chunk=b" ", delay=0.2))

    started = time.monotonic()
    result = await preview.fetch_preview(PAGE_URL)
    elapsed = time.monotonic() - started

    assert result == {"ogImage": None, "title": None}
    assert elapsed < 2.0


@pytest.mark.asyncio
async def test_large_page_is_read_only_up_to_cap(monkeypatch):
    stream = DripStream(head=b"<head><title>Big</title></head>", chunk=b"x" * 65536)
    _serve(monkeypatch, stream=stream)

    result = await preview.fetch_preview(PAGE_URL)

    assert result == {"ogImage": None, "title": "Big"}
    assert stream.sent <= preview.MAX_PAGE_BYTES + 65536


@pytest.mark.parametrize(
    "params, message",
    [
        ({}, "URL parameter is required"),
        ({"url": ""}, "URL parameter is required"),
        ({"url": "not a url"}, "Invalid URL format"),
        ({"url": "javascript:alert(1)"}, "Invalid URL format"),
    ],
)
def test_og_image_rejects_bad_url(client, monkeypatch, params, message):
    seen = _serve(monkeypatch, text="")

    res = client.get("/v1/bookmarks/og-image", params=params)

    assert res.status_code == 400
    assert res.json() == {"status": 400, "message": message}
    assert seen == {}


def test_og_image_does_not_touch_the_database(client, database, monkeypatch):
    _serve(monkeypatch, text="<title>x</title>")

    client.get("/v1/bookmarks/og-image", params={"url": PAGE_URL})

    assert database.calls == []
