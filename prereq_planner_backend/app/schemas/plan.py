from pydantic import BaseModel

from app.schemas.course import CourseResponse


class CourseOrderResponse(BaseModel):
    order: list[CourseResponse]
    message: str


class PrerequisitesResponse(BaseModel):
    course: str
    prerequisites: list[CourseResponse]


class PathResponse(BaseModel):
    start: str
    end: str
    path: list[str] | None = None
    message: str


class ValidationResult(BaseModel):
    valid: bool
    message: str


class SemesterOut(BaseModel):
    term: str
    credits: int
    courses: list[str]


class SemesterPlanResponse(BaseModel):
    semesters: list[SemesterOut] = []
    warnings: list[str] = []


class CatalogAnalysis(BaseModel):
    total_courses: int
    total_prerequisites: int
    longest_path: int
    has_cycle: bool
