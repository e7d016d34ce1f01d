"""Curriculum tools — browse, search, open and copy curriculum files.

All of these read the shared :class:`ContentStore`; ``fetch_google_doc``
additionally exports the linked Google Doc over the network.

Lookup failures (unknown file id, unmatched heading, failed export) are
returned as ``{"error": ...}`` payloads so the model can recover; they are
never raised.
"""

from __future__ import annotations

import logging
from typing import Any

from errors.exceptions import GoogleDocFetchError
from models.artifact import Artifact
from models.curriculum import Resource
from models.tool_args import (
    CopySectionArgs,
    FetchGoogleDocArgs,
    ListFilesArgs,
    OpenFileArgs,
    SearchFilesArgs,
)
from services.google_docs import build_embed_url, html_to_markdown
from services.sections import find_section
from tools.registry import ToolDeps, register_tool

logger = logging.getLogger(__name__)

FILE_TYPES = ["teacher_guide", "student_handout", "assessment", "slides"]

RESOURCE_TO_ARTIFACT_TYPE = {
    "teacher_guide": "lesson_plan",
    "student_handout": "handout",
    "assessment": "assessment",
    "slides": "document",
}

MAX_EXCERPTS = 3
EXCERPT_LEAD = 50
EXCERPT_LENGTH = 150


def _lineage_names(deps: ToolDeps, resource: Resource) -> dict[str, str | None]:
    lesson, unit, course = deps.content.lineage(resource)
    return {
        "lesson": lesson.title if lesson else None,
        "unit": unit.title if unit else None,
        "course": course.name if course else None,
    }


def _excerpts(content: str, query: str) -> list[str]:
    """Up to three ``...excerpt...`` snippets around the first match on each line."""
    needle = query.lower()
    excerpts: list[str] = []
    for line in content.split("\n"):
        pos = line.lower().find(needle)
        if pos == -1:
            continue
        start = max(0, pos - EXCERPT_LEAD)
        end = min(len(line), start + EXCERPT_LENGTH)
        excerpts.append(f"...{line[start:end]}...")
        if len(excerpts) >= MAX_EXCERPTS:
            break
    return excerpts


def resource_artifact(deps: ToolDeps, resource: Resource) -> Artifact:
    """External-link artifact that embeds the resource's source document."""
    names = _lineage_names(deps, resource)
    meta = resource.metadata
    google_url = meta.get("googleDocUrl")
    external_url = google_url or meta.get("externalUrl") or resource.path
    embed_url = meta.get("googleDocEmbedUrl") or build_embed_url(
        google_url or meta.get("externalUrl")
    )
    return Artifact(
        id=f"resource-{resource.id}",
        type=RESOURCE_TO_ARTIFACT_TYPE.get(resource.type, "document"),
        title=resource.title,
        content="",
        external_url=external_url,
        embed_url=embed_url,
        metadata={
            **names,
            "sourceFileId": resource.id,
            "sourceFileType": resource.type,
            **meta,
        },
    )


# ── list_files ──────────────────────────────────────────────


@register_tool(
    ListFilesArgs,
    description=(
        "List curriculum files and folders. Can filter by course, unit, lesson, or file type."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "courseId": {"type": "string", "description": "Optional: Filter by course ID"},
            "unitId": {"type": "string", "description": "Optional: Filter by unit ID"},
            "lessonId": {"type": "string", "description": "Optional: Filter by lesson ID"},
            "fileType": {
                "type": "string",
                "enum": FILE_TYPES,
                "description": "Optional: Filter by file type",
            },
        },
    },
)
async def list_files(deps: ToolDeps, args: ListFilesArgs) -> dict[str, Any]:
    """List curriculum files, narrowest parent filter first."""
    store = deps.content
    if args.lesson_id:
        resources = store.resources_for_lesson(args.lesson_id)
    elif args.unit_id:
        resources = store.resources_for_unit(args.unit_id)
    elif args.course_id:
        resources = store.resources_for_course(args.course_id)
    else:
        resources = store.resources

    if args.file_type:
        resources = [r for r in resources if r.type == args.file_type]

    files = [
        {
            "id": r.id,
            "title": r.title,
            "type": r.type,
            "path": r.path,
            **_lineage_names(deps, r),
            "headings": list(r.headings),
        }
        for r in resources
    ]
    return {"files": files, "count": len(files)}


# ── search_files ────────────────────────────────────────────


@register_tool(
    SearchFilesArgs,
    description=(
        "Search curriculum files by keyword. Searches titles, headings, and content."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search query"},
            "fileType": {
                "type": "string",
                "enum": FILE_TYPES,
                "description": "Optional: Filter results by file type",
            },
        },
        "required": ["query"],
    },
)
async def search_files(deps: ToolDeps, args: SearchFilesArgs) -> dict[str, Any]:
    resources = deps.content.search(args.query)
    if args.file_type:
        resources = [r for r in resources if r.type == args.file_type]

    results = []
    for r in resources:
        names = _lineage_names(deps, r)
        results.append(
            {
                "id": r.id,
                "title": r.title,
                "type": r.type,
                "lesson": names["lesson"],
                "unit": names["unit"],
                "relevance": "high",
                "excerpts": _excerpts(r.content, args.query),
            }
        )
    return {"results": results, "count": len(results), "query": args.query}


# ── open_file ───────────────────────────────────────────────


@register_tool(
    OpenFileArgs,
    description="Open and read a curriculum file. Returns the full content with headings.",
    input_schema={
        "type": "object",
        "properties": {
            "fileId": {"type": "string", "description": "The ID of the file to open"},
            "section": {
                "type": "string",
                "description": "Optional: Specific section heading to focus on",
            },
        },
        "required": ["fileId"],
    },
)
async def open_file(deps: ToolDeps, args: OpenFileArgs) -> dict[str, Any]:
    resource = deps.content.get_resource(args.file_id)
    if resource is None:
        return {"error": "File not found", "fileId": args.file_id}

    content = resource.content
    if args.section:
        section = find_section(content.split("\n"), args.section)
        # An unmatched section falls back to the whole file.
        if section is not None:
            content = section.text

    return {
        "id": resource.id,
        "title": resource.title,
        "type": resource.type,
        "path": resource.path,
        **_lineage_names(deps, resource),
        "headings": list(resource.headings),
        "content": content,
        "artifact": resource_artifact(deps, resource).to_wire(),
    }


# ── copy_section ────────────────────────────────────────────


@register_tool(
    CopySectionArgs,
    description=(
        "Copy exact text from a specific section of a curriculum file. Returns verbatim text."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "fileId": {"type": "string", "description": "The ID of the file"},
            "heading": {
                "type": "string",
                "description": (
                    'The heading/section to copy (e.g., "Guided Practice", "Learning Objectives")'
                ),
            },
        },
        "required": ["fileId", "heading"],
    },
)
async def copy_section(deps: ToolDeps, args: CopySectionArgs) -> dict[str, Any]:
    resource = deps.content.get_resource(args.file_id)
    if resource is None:
        return {"error": "File not found", "fileId": args.file_id}

    section = find_section(resource.content.split("\n"), args.heading)
    if section is None:
        return {
            "error": "Section not found",
            "heading": args.heading,
            "availableHeadings": list(resource.headings),
        }

    return {
        "fileId": args.file_id,
        "heading": args.heading,
        "content": section.text.strip(),
        "note": "This is verbatim text from the curriculum file.",
    }


# ── fetch_google_doc ────────────────────────────────────────


@register_tool(
    FetchGoogleDocArgs,
    description=(
        "Fetch the live Google Doc behind a curriculum file and return it as markdown. "
        "Use when the stored copy may be out of date or the teacher asks for the original."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "fileId": {
                "type": "string",
                "description": "The ID of the curriculum file whose Google Doc to fetch",
            },
        },
        "required": ["fileId"],
    },
)
async def fetch_google_doc(deps: ToolDeps, args: FetchGoogleDocArgs) -> dict[str, Any]:
    resource = deps.content.get_resource(args.file_id)
    if resource is None:
        return {"error": "File not found", "message": f"No curriculum file {args.file_id!r}"}

    doc_url = resource.metadata.get("googleDocUrl")
    if not doc_url:
        return {
            "error": "No Google Doc linked",
            "message": f"{resource.title} has no Google Doc link configured",
        }

    try:
        doc = await deps.google_docs.fetch(doc_url)
    except GoogleDocFetchError as exc:
        logger.warning("fetch_google_doc failed for %s: %s", args.file_id, exc)
        return {"error": "Fetch failed", "message": str(exc)}

    markdown = html_to_markdown(doc.html)
    artifact = resource_artifact(deps, resource)
    artifact = artifact.model_copy(
        update={
            "content": markdown,
            "metadata": {**artifact.metadata, "googleDocTitle": doc.title},
        }
    )
    return {
        "fileId": resource.id,
        "title": doc.title,
        "url": doc.url,
        "markdown": markdown,
        "text": doc.content,
        "artifact": artifact.to_wire(),
    }
