import threading

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.course import Course
from app.schemas.course import CourseCreate, CourseSnapshot, CourseUpdate
from app.services.graph import CycleDetected, ensure_acyclic

logger = get_logger("courses")

# One read-modify-write at a time so the cycle check sees a consistent catalog
_write_lock = threading.Lock()


def list_courses(db: Session) -> list[Course]:
    return db.query(Course).order_by(Course.row_id).all()


def find_course(db: Session, course_id: str) -> Course | None:
    return db.query(Course).filter(Course.id == course_id).first()


def get_course(db: Session, course_id: str) -> Course:
    course = find_course(db, course_id)
    if course is None:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


def _check_acyclic(snapshot: list, message: str) -> None:
    try:
        ensure_acyclic(snapshot, message)
    except CycleDetected as exc:
        logger.warning("Rejected write: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))


def create_course(db: Session, payload: CourseCreate) -> Course:
    with _write_lock:
        courses = list_courses(db)
        if any(c.id == payload.id for c in courses):
            raise HTTPException(status_code=400, detail="Course ID already exists")

        course = Course(**payload.model_dump())
        _check_acyclic(
            courses + [course],
            "Adding this course would create a circular prerequisite dependency",
        )

        db.add(course)
        db.commit()
        db.refresh(course)
    logger.info("Created course %s", course.id)
    return course


def update_course(db: Session, course_id: str, payload: CourseUpdate) -> Course:
    with _write_lock:
        courses = list_courses(db)
        index = next((i for i, c in enumerate(courses) if c.id == course_id), None)
        if index is None:
            raise HTTPException(status_code=404, detail="Course not found")
        course = courses[index]

        changes = payload.model_dump(exclude_none=True)
        if not changes.get("name"):
            changes.pop("name", None)

        hypothetical = [_snapshot_of(c) for c in courses]
        hypothetical[index] = _snapshot_of(course, changes.get("prerequisites"))
        _check_acyclic(
            hypothetical,
            "Updating this course would create a circular prerequisite dependency",
        )

        for field, value in changes.items():
            setattr(course, field, value)
        db.commit()
        db.refresh(course)
    logger.info("Updated course %s", course_id)
    return course


def delete_course(db: Session, course_id: str) -> None:
    with _write_lock:
        courses = list_courses(db)
        target = next((c for c in courses if c.id == course_id), None)
        if target is None:
            raise HTTPException(status_code=404, detail="Course not found")

        for course in courses:
            reqs = course.prerequisites or []
            if course_id in reqs:
                course.prerequisites = [r for r in reqs if r != course_id]

        db.delete(target)
        db.commit()
    logger.info("Deleted course %s", course_id)


def _snapshot_of(course: Course, prerequisites: list[str] | None = None) -> CourseSnapshot:
    if prerequisites is None:
        prerequisites = list(course.prerequisites or [])
    return CourseSnapshot(
        id=course.id,
        name=course.name,
        credits=course.credits,
        description=course.description or "",
        prerequisites=prerequisites,
    )
