"""Document tools — create and revise artifacts, publish assignments.

These tools never touch the content store.  Each result carries the
document it produced under the ``artifact`` key; the orchestration loop
merges it into the conversation's artifact store.  ``update_document``
results are tagged ``"action": "update"`` so the loop can verify that the
target document exists before merging.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from models.tool_args import (
    CreateDocumentArgs,
    CreateEnlightenAssignmentArgs,
    UpdateDocumentArgs,
)
from tools.registry import ToolDeps, register_tool

ENLIGHTEN_BASE_URL = "https://enlighten-ai.com/assignments"
PLACEHOLDER = "_Teacher can adjust during publish_"


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ── create_document ─────────────────────────────────────────


@register_tool(
    CreateDocumentArgs,
    description=(
        "Create a new document (handout, lesson plan, assessment, etc.) that will be "
        "displayed in the artifacts panel."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Document title"},
            "type": {
                "type": "string",
                "enum": ["document", "lesson_plan", "assessment", "handout"],
                "description": "Type of document to create",
            },
            "content": {
                "type": "string",
                "description": "The markdown or HTML content of the document",
            },
            "metadata": {
                "type": "object",
                "description": "Optional metadata like course, unit, lesson, adaptedFor, standards",
            },
        },
        "required": ["title", "type", "content"],
    },
)
async def create_document(deps: ToolDeps, args: CreateDocumentArgs) -> dict[str, Any]:
    document_id = _new_id("doc")
    return {
        "documentId": document_id,
        "title": args.title,
        "type": args.type,
        "created": _now(),
        "message": "Document created and displayed in artifacts panel",
        "artifact": {
            "id": document_id,
            "type": args.type,
            "title": args.title,
            "content": args.content,
            "metadata": dict(args.metadata),
        },
    }


# ── update_document ─────────────────────────────────────────


@register_tool(
    UpdateDocumentArgs,
    description="Update an existing document with new content or revisions.",
    input_schema={
        "type": "object",
        "properties": {
            "documentId": {
                "type": "string",
                "description": "The ID of the document to update",
            },
            "content": {
                "type": "string",
                "description": "The new content (will replace existing content)",
            },
            "title": {"type": "string", "description": "Optional: Update the document title"},
        },
        "required": ["documentId", "content"],
    },
)
async def update_document(deps: ToolDeps, args: UpdateDocumentArgs) -> dict[str, Any]:
    artifact: dict[str, Any] = {"id": args.document_id, "content": args.content}
    if args.title:
        artifact["title"] = args.title
    return {
        "documentId": args.document_id,
        "title": args.title,
        "updated": _now(),
        "message": "Document updated",
        "action": "update",
        "artifact": artifact,
    }


# ── create_enlighten_assignment ─────────────────────────────


def _field_row(label: str, value: str | int | bool | list[str] | None) -> str:
    """One ``- **Label:** value`` bullet; empty values get the placeholder."""
    if value is None or value == "" or value == []:
        return f"- **{label}:** {PLACEHOLDER}"
    if isinstance(value, list):
        items = "\n".join(f"  - {item}" for item in value)
        return f"- **{label}:**\n{items}"
    text = str(value)
    if "\n" in text:
        indented = "\n".join(f"  {line}" for line in text.split("\n"))
        return f"- **{label}:**\n{indented}"
    return f"- **{label}:** {text}"


def render_assignment_markdown(args: CreateEnlightenAssignmentArgs, assignment_id: str) -> str:
    """Render the publish-flow walkthrough shown in the artifacts panel."""
    readings = [f"“{r}”" for r in args.readings] or ["Core Binti mentor text excerpts"]
    examples = [
        f"Example {idx}: {example}"
        for idx, example in enumerate(args.ai_training_examples, start=1)
    ] or ["Example 1: _Teacher can paste an exemplar later_"]
    revisions = args.revision_opportunities if args.revision_opportunities is not None else 1

    details = "\n".join(
        [
            _field_row("Assignment title", args.title),
            _field_row("Expected submission length", args.expected_length or "2-3 paragraphs"),
            _field_row("Grade level", args.grade_level),
            _field_row("Rubric", args.rubric),
            _field_row("Task description and prompt", args.prompt),
            _field_row("Readings or reference text", readings),
        ]
    )
    training = "\n".join(
        [
            _field_row("Expected feedback length", args.ai_feedback_length or "One paragraph"),
            _field_row("Style of feedback", args.ai_feedback_style or "Glows and grows"),
            _field_row(
                "Specific grading and feedback instructions",
                args.grading_notes or "Reference Novel Partners rubric language.",
            ),
            _field_row("Train your AI with examples", examples),
        ]
    )
    publish = "\n".join(
        [
            _field_row(
                "Who can access this assignment?",
                args.sharing_preference or "My classroom use only",
            ),
            _field_row(
                "How would you like to deliver feedback?",
                args.delivery_mode or "I'll grade this assignment later with AI assistance",
            ),
            _field_row("How many revision opportunities?", revisions),
            _field_row(
                "Assign to classes",
                args.assign_to_classes or ["Grade 9 English I - Period 1"],
            ),
            _field_row(
                "Disable pasting for students",
                "Enabled" if args.disable_pasting else "Disabled",
            ),
        ]
    )

    return f"""# EnlightenAI Assignment Builder

Use the fields below to mirror the Enlighten.ai publish flow. Everything is pre-filled with Novel Partners curriculum context so the teacher can verify and publish in a few clicks.

## Step 1 · Assignment details
{details}

## Step 2 · AI training (optional)
{training}

## Step 3 · Publish assignment
{publish}

---
- Assignment URL (demo): {ENLIGHTEN_BASE_URL}/{assignment_id}
- Next action: Open Enlighten.ai, confirm the pre-filled values, then click **Publish assignment**."""


@register_tool(
    CreateEnlightenAssignmentArgs,
    description=(
        "Create an assignment in EnlightenAI (mocked for demo). Returns an assignment ID."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Assignment title"},
            "gradeLevel": {"type": "string", "description": 'Grade level (e.g., "9")'},
            "prompt": {
                "type": "string",
                "description": "The assignment prompt/instructions",
            },
            "rubric": {"type": "string", "description": "Rubric ID or rubric content"},
            "expectedLength": {
                "type": "string",
                "description": 'Expected response length (e.g., "2-3 paragraphs", "500 words")',
            },
            "courseId": {"type": "string", "description": "Course ID"},
            "courseName": {
                "type": "string",
                "description": "Human-readable course name for display",
            },
            "unitTitle": {"type": "string", "description": "Unit title for context chips"},
            "readings": {
                "type": "array",
                "description": "Reference texts or readings students should use",
                "items": {"type": "string"},
            },
            "aiFeedbackLength": {
                "type": "string",
                "description": 'Length of AI-generated feedback (e.g., "One paragraph")',
            },
            "aiFeedbackStyle": {
                "type": "string",
                "description": 'Feedback tone/style (e.g., "Glows and grows")',
            },
            "gradingNotes": {
                "type": "string",
                "description": "Specific grading or feedback instructions for the AI",
            },
            "revisionOpportunities": {
                "type": "number",
                "description": "Number of revision opportunities students receive",
            },
            "deliveryMode": {
                "type": "string",
                "description": (
                    "How feedback is delivered (e.g., \"I'll grade this assignment later "
                    'with AI assistance")'
                ),
            },
            "sharingPreference": {
                "type": "string",
                "description": 'Who has visibility to the assignment (e.g., "My classroom use only")',
            },
            "assignToClasses": {
                "type": "array",
                "description": "Classes or sections the assignment should be published to",
                "items": {"type": "string"},
            },
            "disablePasting": {
                "type": "boolean",
                "description": (
                    "Whether to prevent students from pasting text into the response field"
                ),
            },
            "aiTrainingExamples": {
                "type": "array",
                "description": "Optional exemplar responses to train the AI grader",
                "items": {"type": "string"},
            },
        },
        "required": ["title", "gradeLevel", "prompt", "rubric"],
    },
)
async def create_enlighten_assignment(
    deps: ToolDeps, args: CreateEnlightenAssignmentArgs
) -> dict[str, Any]:
    assignment_id = _new_id("assign")
    url = f"{ENLIGHTEN_BASE_URL}/{assignment_id}"
    return {
        "assignmentId": assignment_id,
        "status": "created",
        "title": args.title,
        "gradeLevel": args.grade_level,
        "courseId": args.course_id,
        "prompt": args.prompt,
        "rubric": args.rubric,
        "expectedLength": args.expected_length,
        "url": url,
        "message": "Assignment created in EnlightenAI (demo mode)",
        "note": (
            "This is a mock assignment. In production, this would post to the real "
            "EnlightenAI API."
        ),
        "artifact": {
            "id": f"enlighten-{assignment_id}",
            "type": "assessment",
            "title": f"{args.title} · EnlightenAI Flow",
            "content": render_assignment_markdown(args, assignment_id),
            "metadata": {
                "course": args.course_name,
                "unit": args.unit_title,
                "gradeLevel": args.grade_level,
            },
        },
    }
