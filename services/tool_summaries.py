"""Tool activity text — labels, descriptions and result summaries.

Used by the orchestration loop to decorate ``tool_start`` / ``tool_result``
stream events so the client can show what the assistant is doing:

- label: short badge text, e.g. "Opening file"
- description: one line naming the target, e.g. "Opening resource-1 (section: Warm-Up)"
- result summary: one line describing the outcome, e.g. "Found 2 files"
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

SUMMARY_MAX_CHARS = 200

_LABELS: dict[str, str] = {
    "list_files": "Listing files",
    "search_files": "Searching curriculum",
    "open_file": "Opening file",
    "copy_section": "Copying section",
    "fetch_google_doc": "Fetching Google Doc",
    "create_document": "Creating document",
    "update_document": "Updating document",
    "create_enlighten_assignment": "Creating EnlightenAI assignment",
}


def tool_label(tool_name: str) -> str:
    return _LABELS.get(tool_name, tool_name.replace("_", " ").capitalize())


def describe_tool_call(tool_name: str, tool_input: dict[str, Any]) -> str:
    """Human description of a pending call, built from its arguments."""
    args = tool_input or {}
    if tool_name == "list_files":
        filters = [
            f"{key}={args[key]}"
            for key in ("courseId", "unitId", "lessonId", "fileType")
            if args.get(key)
        ]
        return "Listing curriculum files" + (f" ({', '.join(filters)})" if filters else "")
    if tool_name == "search_files":
        return f"Searching curriculum for “{args.get('query', '')}”"
    if tool_name == "open_file":
        section = args.get("section")
        suffix = f" (section: {section})" if section else ""
        return f"Opening {args.get('fileId', 'file')}{suffix}"
    if tool_name == "copy_section":
        return f"Copying “{args.get('heading', '')}” from {args.get('fileId', 'file')}"
    if tool_name == "fetch_google_doc":
        return f"Fetching the Google Doc for {args.get('fileId', 'file')}"
    if tool_name == "create_document":
        return f"Creating “{args.get('title', 'Untitled Document')}”"
    if tool_name == "update_document":
        return f"Updating {args.get('documentId', 'document')}"
    if tool_name == "create_enlighten_assignment":
        return f"Creating EnlightenAI assignment “{args.get('title', '')}”"
    return tool_label(tool_name)


def _truncate(text: str) -> str:
    if len(text) <= SUMMARY_MAX_CHARS:
        return text
    return text[:SUMMARY_MAX_CHARS].rstrip() + "…"


# ── Per-tool extractors ──────────────────────────────────────────────


def _summarize_list_files(r: dict) -> str | None:
    count = r.get("count", len(r.get("files") or []))
    return f"Found {count} file{'s' if count != 1 else ''}"


def _summarize_search_files(r: dict) -> str | None:
    count = r.get("count", len(r.get("results") or []))
    query = r.get("query")
    noun = f"result{'s' if count != 1 else ''}"
    return f"Found {count} {noun} for “{query}”" if query else f"Found {count} {noun}"


def _summarize_open_file(r: dict) -> str | None:
    title = r.get("title")
    return f"Opened {title}" if title else None


def _summarize_copy_section(r: dict) -> str | None:
    heading = r.get("heading")
    return f"Copied section “{heading}”" if heading else None


def _summarize_fetch_google_doc(r: dict) -> str | None:
    title = r.get("title")
    return f"Fetched “{title}” from Google Docs" if title else None


def _summarize_create_document(r: dict) -> str | None:
    title = r.get("title")
    return f"Created “{title}”" if title else None


def _summarize_update_document(r: dict) -> str | None:
    return f"Updated {r.get('title') or r.get('documentId') or 'document'}"


def _summarize_assignment(r: dict) -> str | None:
    title = r.get("title")
    return f"Assignment “{title}” ready to publish" if title else None


_EXTRACTORS: dict[str, Callable[[dict], str | None]] = {
    "list_files": _summarize_list_files,
    "search_files": _summarize_search_files,
    "open_file": _summarize_open_file,
    "copy_section": _summarize_copy_section,
    "fetch_google_doc": _summarize_fetch_google_doc,
    "create_document": _summarize_create_document,
    "update_document": _summarize_update_document,
    "create_enlighten_assignment": _summarize_assignment,
}


def summarize_tool_result(tool_name: str, result: Any) -> str | None:
    """Return a one-line summary of *result*, or None when nothing fits.

    Order: plain strings (truncated) → error payloads → per-tool phrasing →
    generic ``count`` → ``message`` field.
    """
    if isinstance(result, str):
        return _truncate(result)
    if not isinstance(result, dict):
        return None

    if "error" in result:
        detail = result.get("message") or result.get("error")
        return _truncate(f"Error: {detail}")

    fn = _EXTRACTORS.get(tool_name)
    if fn is not None:
        try:
            summary = fn(result)
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.debug("summary extractor for %s failed", tool_name, exc_info=True)
            summary = None
        if summary:
            return _truncate(summary)

    count = result.get("count")
    if isinstance(count, int):
        return f"Found {count} item{'s' if count != 1 else ''}"

    message = result.get("message")
    if isinstance(message, str) and message:
        return _truncate(message)
    return None
