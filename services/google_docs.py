"""Google Docs export client.

Fetches publicly shared Google Docs through the ``/export`` endpoint
(``format=txt`` and ``format=html``) and converts the HTML export into the
plain markdown the content store uses.

Wraps ``httpx.AsyncClient`` with:
- doc-id extraction from full URLs
- concurrent text + HTML export
- connection-pool lifecycle tied to FastAPI lifespan
"""

from __future__ import annotations

import asyncio
import html as html_lib
import logging
import re
from dataclasses import dataclass

import httpx

from config.settings import get_settings
from errors.exceptions import GoogleDocFetchError

logger = logging.getLogger(__name__)

_client: GoogleDocsClient | None = None

_EXPORT_URL = "https://docs.google.com/document/d/{doc_id}/export?format={fmt}"
_EDIT_URL = "https://docs.google.com/document/d/{doc_id}/edit"

_DOC_ID_PATTERNS = (
    re.compile(r"/document/d/([a-zA-Z0-9-_]+)"),
    re.compile(r"/d/([a-zA-Z0-9-_]+)"),
)
_TITLE_RE = re.compile(r"<title>(.*?)</title>", re.IGNORECASE | re.DOTALL)


@dataclass
class GoogleDocContent:
    id: str
    title: str
    content: str
    html: str
    url: str


def extract_doc_id(url: str) -> str | None:
    """Pull the document id out of a Google Docs / Drive URL."""
    for pattern in _DOC_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def _resolve_doc_id(doc_id_or_url: str) -> str:
    if "docs.google.com" in doc_id_or_url or "drive.google.com" in doc_id_or_url:
        doc_id = extract_doc_id(doc_id_or_url)
    else:
        doc_id = doc_id_or_url.strip() or None
    if not doc_id:
        raise GoogleDocFetchError("Invalid Google Docs URL or ID")
    return doc_id


def build_embed_url(url: str | None) -> str | None:
    """Derive an embeddable preview URL from a Google Docs / Slides / Drive link."""
    if not url:
        return None

    if "docs.google.com/document" in url:
        if "/preview" in url:
            return url
        if "/edit" in url:
            return re.sub(r"/edit[^#?]*", "/preview", url, count=1)
        if "/view" in url:
            return re.sub(r"/view[^#?]*", "/preview", url, count=1)

    if "docs.google.com/presentation" in url:
        if "/preview" in url:
            return url
        return re.sub(r"/edit[^#?]*", "/embed", url, count=1)

    if "drive.google.com" in url:
        if "/preview" in url:
            return url
        return re.sub(r"/view[^#?]*", "/preview", url, count=1)

    return url


# ── HTML → markdown ─────────────────────────────────────────

_I = re.IGNORECASE
_HTML_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"<style[^>]*>[\s\S]*?</style>", _I), ""),
    (re.compile(r"<h1[^>]*>(.*?)</h1>", _I), r"# \1\n\n"),
    (re.compile(r"<h2[^>]*>(.*?)</h2>", _I), r"## \1\n\n"),
    (re.compile(r"<h3[^>]*>(.*?)</h3>", _I), r"### \1\n\n"),
    (re.compile(r"<h4[^>]*>(.*?)</h4>", _I), r"#### \1\n\n"),
    (re.compile(r"<strong[^>]*>(.*?)</strong>", _I), r"**\1**"),
    (re.compile(r"<b(?:\s[^>]*)?>(.*?)</b>", _I), r"**\1**"),
    (re.compile(r"<em[^>]*>(.*?)</em>", _I), r"*\1*"),
    (re.compile(r"<i(?:\s[^>]*)?>(.*?)</i>", _I), r"*\1*"),
    (re.compile(r"<li[^>]*>(.*?)</li>", _I), r"- \1\n"),
    (re.compile(r"</?(?:ul|ol)[^>]*>", _I), "\n"),
    (re.compile(r"<p(?:\s[^>]*)?>(.*?)</p>", _I), r"\1\n\n"),
    (re.compile(r"<br[^>]*>", _I), "\n"),
    (re.compile(r"<[^>]+>"), ""),
]
_BLANK_RUN_RE = re.compile(r"\n\s*\n\s*\n")


def html_to_markdown(raw_html: str) -> str:
    """Convert a Google Docs HTML export into simple markdown."""
    markdown = raw_html
    for pattern, replacement in _HTML_RULES:
        markdown = pattern.sub(replacement, markdown)
    markdown = html_lib.unescape(markdown).replace("\xa0", " ")
    # Collapse repeatedly: one pass leaves runs of 4+ blank lines partially intact.
    previous = None
    while previous != markdown:
        previous = markdown
        markdown = _BLANK_RUN_RE.sub("\n\n", markdown)
    return markdown.strip()


def extract_title(raw_html: str) -> str:
    match = _TITLE_RE.search(raw_html)
    return html_lib.unescape(match.group(1)).strip() if match else "Untitled Document"


# ── Client ──────────────────────────────────────────────────


class GoogleDocsClient:
    """Async exporter for publicly shared Google Docs."""

    def __init__(self, timeout: float | None = None, http: httpx.AsyncClient | None = None) -> None:
        self._timeout = timeout if timeout is not None else get_settings().google_docs_timeout
        self._http = http
        self._owns_http = http is None

    # -- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
        )
        logger.info("GoogleDocsClient started — timeout=%.1fs", self._timeout)

    async def close(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None
            logger.info("GoogleDocsClient closed")

    # -- export --------------------------------------------------------------

    async def _export(self, doc_id: str, fmt: str) -> str:
        if self._http is None:
            await self.start()
        url = _EXPORT_URL.format(doc_id=doc_id, fmt=fmt)
        try:
            resp = await self._http.get(url)
        except httpx.HTTPError as exc:
            raise GoogleDocFetchError(f"Error fetching Google Doc: {exc}") from exc
        if resp.status_code >= 400:
            logger.warning(
                "Google Doc export failed: doc_id=%s format=%s status=%d",
                doc_id,
                fmt,
                resp.status_code,
            )
            raise GoogleDocFetchError(
                f"Failed to fetch document: {resp.reason_phrase or resp.status_code}",
                status_code=resp.status_code,
            )
        return resp.text

    async def fetch(self, doc_id_or_url: str) -> GoogleDocContent:
        """Fetch text + HTML exports concurrently and extract the title."""
        doc_id = _resolve_doc_id(doc_id_or_url)
        start = asyncio.get_running_loop().time()
        text, raw_html = await asyncio.gather(
            self._export(doc_id, "txt"),
            self._export(doc_id, "html"),
        )
        logger.info(
            "Google Doc fetched: doc_id=%s chars=%d elapsed=%.0fms",
            doc_id,
            len(text),
            (asyncio.get_running_loop().time() - start) * 1000,
        )
        return GoogleDocContent(
            id=doc_id,
            title=extract_title(raw_html),
            content=text,
            html=raw_html,
            url=_EDIT_URL.format(doc_id=doc_id),
        )


def get_google_docs_client() -> GoogleDocsClient:
    """Return the process-wide client (created lazily)."""
    global _client
    if _client is None:
        _client = GoogleDocsClient()
    return _client
