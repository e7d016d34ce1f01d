"""Typed argument records — one variant per tool.

The model sends tool arguments as loose JSON with camelCase keys.  Each
tool declares one of these models; the registry validates the raw input
against it before the tool body runs, so a missing required field fails
closed at the boundary instead of on first access.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from models.artifact import ArtifactType
from models.base import CamelModel
from models.curriculum import ResourceType


def _as_list(value: Any) -> Any:
    """Accept a single string where a list of strings is declared."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


class ToolArgs(CamelModel):
    """Base for all tool argument records."""


class ListFilesArgs(ToolArgs):
    course_id: str | None = None
    unit_id: str | None = None
    lesson_id: str | None = None
    file_type: ResourceType | None = None


class SearchFilesArgs(ToolArgs):
    query: str
    file_type: ResourceType | None = None


class OpenFileArgs(ToolArgs):
    file_id: str
    section: str | None = None


class CopySectionArgs(ToolArgs):
    file_id: str
    heading: str


class FetchGoogleDocArgs(ToolArgs):
    file_id: str


class CreateDocumentArgs(ToolArgs):
    title: str
    type: ArtifactType
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class UpdateDocumentArgs(ToolArgs):
    document_id: str
    content: str
    title: str | None = None


class CreateEnlightenAssignmentArgs(ToolArgs):
    title: str
    grade_level: str
    prompt: str
    rubric: str
    expected_length: str | None = None
    course_id: str | None = None
    course_name: str | None = None
    unit_title: str | None = None
    readings: list[str] = Field(default_factory=list)
    ai_feedback_length: str | None = None
    ai_feedback_style: str | None = None
    grading_notes: str | None = None
    revision_opportunities: int | None = None
    delivery_mode: str | None = None
    sharing_preference: str | None = None
    assign_to_classes: list[str] = Field(default_factory=list)
    disable_pasting: bool = False
    ai_training_examples: list[str] = Field(default_factory=list)

    @field_validator("grade_level", mode="before")
    @classmethod
    def _grade_as_text(cls, value: Any) -> Any:
        # Models often send the grade as a number (9 instead of "9").
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value)) if float(value).is_integer() else str(value)
        return value

    @field_validator("readings", "assign_to_classes", "ai_training_examples", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> Any:
        return _as_list(value)

