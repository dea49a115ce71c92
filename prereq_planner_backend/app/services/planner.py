from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.models.course import Course
from app.schemas.course import CourseResponse, CourseSnapshot
from app.schemas.plan import (
    CatalogAnalysis,
    CourseOrderResponse,
    PathResponse,
    PrerequisitesResponse,
    SemesterOut,
    SemesterPlanResponse,
    ValidationResult,
)
from app.services.courses import find_course, get_course, list_courses
from app.services.graph import (
    CycleDetected,
    detect_cycle,
    find_all_prerequisites,
    find_shortest_path,
    longest_prerequisite_chain,
    topological_sort,
)
from app.services.scheduler import schedule_terms

logger = get_logger("planner")

_CYCLE_DETAIL = "Cannot create course order: circular dependencies detected"


def _ordered(courses: list[Course]) -> list[Course]:
    try:
        order = topological_sort(courses)
    except CycleDetected:
        logger.warning("Course order requested on a cyclic catalog")
        raise HTTPException(status_code=400, detail=_CYCLE_DETAIL)
    by_id: dict[str, Course] = {}
    for course in courses:
        by_id.setdefault(course.id, course)
    return [by_id[cid] for cid in order if cid in by_id]


def get_course_order(db: Session) -> CourseOrderResponse:
    courses = list_courses(db)
    if not courses:
        return CourseOrderResponse(order=[], message="No courses available")
    return CourseOrderResponse(
        order=[CourseResponse.model_validate(c) for c in _ordered(courses)],
        message="Courses ordered by prerequisites using topological sort",
    )


def get_course_prerequisites(db: Session, course_id: str) -> PrerequisitesResponse:
    course = get_course(db, course_id)
    courses = list_courses(db)
    by_id = {c.id: c for c in courses}
    resolved = find_all_prerequisites(course_id, courses)
    return PrerequisitesResponse(
        course=course.name,
        prerequisites=[
            CourseResponse.model_validate(by_id[cid]) for cid in resolved if cid in by_id
        ],
    )


def get_course_path(db: Session, start: str, end: str) -> PathResponse:
    for course_id in (start, end):
        if find_course(db, course_id) is None:
            raise HTTPException(status_code=404, detail=f"Course not found: {course_id}")
    path = find_shortest_path(start, end, list_courses(db))
    message = "No prerequisite path between these courses"
    if path is not None:
        message = f"Shortest prerequisite path spans {len(path) - 1} step(s)"
    return PathResponse(start=start, end=end, path=path, message=message)


def get_semester_plan(db: Session) -> SemesterPlanResponse:
    courses = list_courses(db)
    if not courses:
        return SemesterPlanResponse()
    ordered = _ordered(courses)
    schedule = schedule_terms(
        ordered_courses=[c.id for c in ordered],
        prereqs={c.id: list(c.prerequisites or []) for c in ordered},
        credits={c.id: c.credits for c in ordered},
        max_courses=settings.max_courses_per_semester,
    )
    return SemesterPlanResponse(
        semesters=[SemesterOut(**t) for t in schedule.terms],
        warnings=schedule.bottlenecks,
    )


def analyze_catalog(db: Session) -> CatalogAnalysis:
    courses = list_courses(db)
    return CatalogAnalysis(
        total_courses=len(courses),
        total_prerequisites=sum(len(c.prerequisites or []) for c in courses),
        longest_path=longest_prerequisite_chain(courses),
        has_cycle=detect_cycle(courses),
    )


def validate_courses(courses: list[CourseSnapshot]) -> ValidationResult:
    has_cycle = detect_cycle(courses)
    return ValidationResult(
        valid=not has_cycle,
        message="Circular dependencies detected" if has_cycle else "No circular dependencies found",
    )
