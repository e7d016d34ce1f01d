"""Curriculum catalogue endpoint for the client's course/unit/lesson pickers."""

from fastapi import APIRouter, Depends

from services.content_store import ContentStore, get_content_store

router = APIRouter(prefix="/api", tags=["curriculum"])


@router.get("/curriculum")
async def curriculum_tree(content: ContentStore = Depends(get_content_store)):
    """Courses with their units, lessons and rubrics (no file contents)."""
    courses = []
    for course in content.courses:
        units = []
        for unit in content.units_for_course(course.id):
            unit_wire = unit.model_dump(by_alias=True)
            unit_wire["lessons"] = [
                {
                    **lesson.model_dump(by_alias=True),
                    "resources": [
                        {"id": r.id, "title": r.title, "type": r.type}
                        for r in content.resources_for_lesson(lesson.id)
                    ],
                }
                for lesson in content.lessons_for_unit(unit.id)
            ]
            units.append(unit_wire)
        courses.append(
            {
                **course.model_dump(by_alias=True),
                "units": units,
                "rubrics": [
                    {"id": r.id, "name": r.name} for r in content.rubrics_for_course(course.id)
                ],
            }
        )
    return {
        "courses": courses,
        "rubrics": [
            {"id": r.id, "courseId": r.course_id, "name": r.name} for r in content.rubrics
        ],
    }
