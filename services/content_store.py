"""Read-only curriculum content store.

Holds the course → unit → lesson → resource hierarchy (plus rubrics) and
answers the queries the curriculum tools need: lookup by id at each level,
filter by parent, and case-insensitive substring search.

The store is built once and never mutated, so a single instance is shared
by all concurrent requests without locking.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Iterable

from errors.exceptions import ContentStoreError
from models.curriculum import Course, Lesson, Resource, Rubric, Unit

logger = logging.getLogger(__name__)


class ContentStore:
    """In-memory curriculum catalog with referential-integrity checks."""

    def __init__(
        self,
        courses: Iterable[Course],
        units: Iterable[Unit],
        lessons: Iterable[Lesson],
        resources: Iterable[Resource],
        rubrics: Iterable[Rubric] = (),
    ) -> None:
        self._courses = {c.id: c for c in courses}
        self._units = {u.id: u for u in units}
        self._lessons = {lesson.id: lesson for lesson in lessons}
        self._resources = {r.id: r for r in resources}
        self._rubrics = {r.id: r for r in rubrics}
        self._validate()

    @classmethod
    def from_dicts(
        cls,
        *,
        courses: list[dict[str, Any]],
        units: list[dict[str, Any]],
        lessons: list[dict[str, Any]],
        resources: list[dict[str, Any]],
        rubrics: list[dict[str, Any]] | None = None,
    ) -> ContentStore:
        return cls(
            courses=[Course.model_validate(c) for c in courses],
            units=[Unit.model_validate(u) for u in units],
            lessons=[Lesson.model_validate(item) for item in lessons],
            resources=[Resource.model_validate(r) for r in resources],
            rubrics=[Rubric.model_validate(r) for r in rubrics or []],
        )

    def _validate(self) -> None:
        for unit in self._units.values():
            if unit.course_id not in self._courses:
                raise ContentStoreError(
                    f"unit {unit.id!r} references unknown course {unit.course_id!r}"
                )
        for lesson in self._lessons.values():
            if lesson.unit_id not in self._units:
                raise ContentStoreError(
                    f"lesson {lesson.id!r} references unknown unit {lesson.unit_id!r}"
                )
        for resource in self._resources.values():
            if resource.lesson_id not in self._lessons:
                raise ContentStoreError(
                    f"resource {resource.id!r} references unknown lesson {resource.lesson_id!r}"
                )
        for rubric in self._rubrics.values():
            if rubric.course_id not in self._courses:
                raise ContentStoreError(
                    f"rubric {rubric.id!r} references unknown course {rubric.course_id!r}"
                )

    # ── Lookup by id ────────────────────────────────────────

    def get_course(self, course_id: str) -> Course | None:
        return self._courses.get(course_id)

    def get_unit(self, unit_id: str) -> Unit | None:
        return self._units.get(unit_id)

    def get_lesson(self, lesson_id: str) -> Lesson | None:
        return self._lessons.get(lesson_id)

    def get_resource(self, resource_id: str) -> Resource | None:
        return self._resources.get(resource_id)

    def get_rubric(self, rubric_id: str) -> Rubric | None:
        return self._rubrics.get(rubric_id)

    # ── Listing / filter by parent ──────────────────────────

    @property
    def courses(self) -> list[Course]:
        return list(self._courses.values())

    @property
    def units(self) -> list[Unit]:
        return list(self._units.values())

    @property
    def lessons(self) -> list[Lesson]:
        return list(self._lessons.values())

    @property
    def resources(self) -> list[Resource]:
        return list(self._resources.values())

    @property
    def rubrics(self) -> list[Rubric]:
        return list(self._rubrics.values())

    def units_for_course(self, course_id: str) -> list[Unit]:
        return [u for u in self._units.values() if u.course_id == course_id]

    def lessons_for_unit(self, unit_id: str) -> list[Lesson]:
        return [lesson for lesson in self._lessons.values() if lesson.unit_id == unit_id]

    def resources_for_lesson(self, lesson_id: str) -> list[Resource]:
        return [r for r in self._resources.values() if r.lesson_id == lesson_id]

    def resources_for_unit(self, unit_id: str) -> list[Resource]:
        lesson_ids = {lesson.id for lesson in self.lessons_for_unit(unit_id)}
        return [r for r in self._resources.values() if r.lesson_id in lesson_ids]

    def resources_for_course(self, course_id: str) -> list[Resource]:
        unit_ids = {u.id for u in self.units_for_course(course_id)}
        lesson_ids = {
            lesson.id for lesson in self._lessons.values() if lesson.unit_id in unit_ids
        }
        return [r for r in self._resources.values() if r.lesson_id in lesson_ids]

    def rubrics_for_course(self, course_id: str) -> list[Rubric]:
        return [r for r in self._rubrics.values() if r.course_id == course_id]

    def lineage(self, resource: Resource) -> tuple[Lesson | None, Unit | None, Course | None]:
        """Return the (lesson, unit, course) that contain *resource*."""
        lesson = self._lessons.get(resource.lesson_id)
        unit = self._units.get(lesson.unit_id) if lesson else None
        course = self._courses.get(unit.course_id) if unit else None
        return lesson, unit, course

    # ── Search ──────────────────────────────────────────────

    def search(self, query: str) -> list[Resource]:
        """Case-insensitive substring match over title, content and headings."""
        needle = query.lower()
        return [
            r
            for r in self._resources.values()
            if needle in r.title.lower()
            or needle in r.content.lower()
            or any(needle in h.lower() for h in r.headings)
        ]


@lru_cache
def get_content_store() -> ContentStore:
    """Process-wide content store built from the static curriculum definition."""
    from services import curriculum_data

    store = ContentStore.from_dicts(
        courses=curriculum_data.COURSES,
        units=curriculum_data.UNITS,
        lessons=curriculum_data.LESSONS,
        resources=curriculum_data.RESOURCES,
        rubrics=curriculum_data.RUBRICS,
    )
    logger.info(
        "Content store loaded: %d courses, %d units, %d lessons, %d resources",
        len(store.courses),
        len(store.units),
        len(store.lessons),
        len(store.resources),
    )
    return store
