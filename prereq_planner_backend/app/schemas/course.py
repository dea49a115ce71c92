from pydantic import BaseModel, Field, field_validator

# Literal GET routes under /api/courses that shadow /api/courses/{course_id}
RESERVED_COURSE_IDS = {"order", "plan", "analysis", "path"}


class CourseCreate(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    credits: int = Field(3, ge=1)
    description: str = ""
    prerequisites: list[str] = []

    @field_validator("id")
    @classmethod
    def id_not_reserved(cls, value: str) -> str:
        if value in RESERVED_COURSE_IDS:
            raise ValueError(f"'{value}' is reserved and cannot be used as a course ID")
        return value


class CourseUpdate(BaseModel):
    """All fields optional; only provided fields are written."""

    name: str | None = None
    credits: int | None = Field(None, ge=1)
    description: str | None = None
    prerequisites: list[str] | None = None


class CourseSnapshot(BaseModel):
    """A course as supplied by a caller for a standalone cycle check."""

    id: str
    name: str = ""
    credits: int = 3
    description: str = ""
    prerequisites: list[str] | None = None


class CourseResponse(BaseModel):
    id: str
    name: str
    credits: int
    description: str
    prerequisites: list[str]

    model_config = {
        "from_attributes": True,
    }


class CourseMutationResponse(BaseModel):
    message: str
    course: CourseResponse


class MessageResponse(BaseModel):
    message: str
