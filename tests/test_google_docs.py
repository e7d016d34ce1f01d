"""Tests for the Google Docs export client and HTML conversion."""

import httpx
import pytest

from errors.exceptions import GoogleDocFetchError
from services.google_docs import (
    GoogleDocsClient,
    build_embed_url,
    extract_doc_id,
    extract_title,
    html_to_markdown,
)

DOC_URL = "https://docs.google.com/document/d/abc123_XYZ/edit?usp=sharing"


def test_extract_doc_id():
    assert extract_doc_id(DOC_URL) == "abc123_XYZ"
    assert extract_doc_id("https://drive.google.com/file/d/f-1/view") == "f-1"
    assert extract_doc_id("https://example.com/nothing") is None


def test_build_embed_url():
    assert build_embed_url(DOC_URL) == "https://docs.google.com/document/d/abc123_XYZ/preview?usp=sharing"
    assert (
        build_embed_url("https://docs.google.com/presentation/d/p1/edit#slide=id.p")
        == "https://docs.google.com/presentation/d/p1/embed#slide=id.p"
    )
    assert (
        build_embed_url("https://drive.google.com/file/d/f-1/view?usp=sharing")
        == "https://drive.google.com/file/d/f-1/preview?usp=sharing"
    )
    assert build_embed_url(None) is None


def test_html_to_markdown():
    raw = (
        "<style>.c1{color:red}</style>"
        "<h1>Title</h1><h2>Part</h2>"
        "<p>Read <strong>closely</strong> and <em>annotate</em>&nbsp;&amp; discuss.</p>"
        "<ul><li>One</li><li>Two</li></ul>"
        "<p>Line<br>break</p><span>plain</span>"
    )
    markdown = html_to_markdown(raw)
    assert "color:red" not in markdown
    assert markdown.startswith("# Title\n\n## Part")
    assert "Read **closely** and *annotate* & discuss." in markdown
    assert "- One\n- Two" in markdown
    assert "Line\nbreak" in markdown
    assert "<" not in markdown
    assert "\n\n\n" not in markdown


def test_extract_title():
    assert extract_title("<html><title> Unit &amp; Plan </title></html>") == "Unit & Plan"
    assert extract_title("<html></html>") == "Untitled Document"


def _client(handler) -> GoogleDocsClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleDocsClient(timeout=5.0, http=http)


@pytest.mark.asyncio
async def test_fetch_exports_text_and_html():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.params["format"])
        if request.url.params["format"] == "txt":
            return httpx.Response(200, text="Plain body")
        return httpx.Response(200, text="<html><title>Guide</title><p>Body</p></html>")

    client = _client(handler)
    doc = await client.fetch(DOC_URL)

    assert sorted(seen) == ["html", "txt"]
    assert doc.id == "abc123_XYZ"
    assert doc.title == "Guide"
    assert doc.content == "Plain body"
    assert doc.url == "https://docs.google.com/document/d/abc123_XYZ/edit"


@pytest.mark.asyncio
async def test_fetch_non_success_raises_with_status_text():
    client = _client(lambda request: httpx.Response(404))
    with pytest.raises(GoogleDocFetchError) as exc_info:
        await client.fetch("abc123")
    assert exc_info.value.status_code == 404
    assert "Not Found" in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_rejects_bad_url():
    client = _client(lambda request: httpx.Response(200))
    with pytest.raises(GoogleDocFetchError, match="Invalid"):
        await client.fetch("https://docs.google.com/document/")
