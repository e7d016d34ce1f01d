"""Curriculum content models — course → unit → lesson → resource.

The hierarchy is populated once from static data and never mutated, so
these models are frozen.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import ConfigDict, Field

from models.base import CamelModel

ResourceType = Literal["teacher_guide", "student_handout", "assessment", "slides"]


class _FrozenCamelModel(CamelModel):
    model_config = ConfigDict(frozen=True)


class Course(_FrozenCamelModel):
    id: str
    name: str
    grade: str


class Unit(_FrozenCamelModel):
    id: str
    course_id: str
    number: int
    title: str
    objectives: list[str] = Field(default_factory=list)
    standards: list[str] = Field(default_factory=list)


class Lesson(_FrozenCamelModel):
    id: str
    unit_id: str
    number: int
    title: str


class Resource(_FrozenCamelModel):
    """A curriculum file: guide, handout, assessment or slide deck.

    ``metadata`` is open-ended; it may carry ``googleDocUrl``,
    ``googleDocEmbedUrl`` or ``externalUrl`` links.
    """

    id: str
    lesson_id: str
    type: ResourceType
    title: str
    path: str
    content: str
    headings: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class RubricLevel(_FrozenCamelModel):
    score: int
    description: str


class RubricCriterion(_FrozenCamelModel):
    name: str
    description: str
    levels: list[RubricLevel] = Field(default_factory=list)


class Rubric(_FrozenCamelModel):
    id: str
    course_id: str
    name: str
    criteria: list[RubricCriterion] = Field(default_factory=list)
