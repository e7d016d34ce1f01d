"""Artifact model — documents surfaced in the side panel next to the chat."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from models.base import CamelModel

ArtifactType = Literal["document", "lesson_plan", "assessment", "handout"]

DEFAULT_ARTIFACT_TYPE: ArtifactType = "document"
DEFAULT_ARTIFACT_TITLE = "Untitled Document"


class Artifact(CamelModel):
    """A generated or referenced document.

    ``content`` may be empty when the artifact is only an embed of an
    external document (``external_url`` / ``embed_url``).  ``metadata`` is an
    open mapping (course / unit / lesson names, adaptation notes, standards,
    provenance) and is deep-merged when the same ``id`` arrives again.
    """

    id: str
    type: ArtifactType = DEFAULT_ARTIFACT_TYPE
    title: str = DEFAULT_ARTIFACT_TITLE
    content: str = ""
    external_url: str | None = None
    embed_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
