from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserOut
from app.schemas.course import (
    CourseCreate,
    CourseMutationResponse,
    CourseResponse,
    CourseSnapshot,
    CourseUpdate,
    MessageResponse,
)
from app.schemas.plan import (
    CatalogAnalysis,
    CourseOrderResponse,
    PathResponse,
    PrerequisitesResponse,
    SemesterPlanResponse,
    ValidationResult,
)
from app.services.auth import get_current_user, login_user, register_user
from app.services.courses import create_course, delete_course, get_course, list_courses, update_course
from app.services.planner import (
    analyze_catalog,
    get_course_order,
    get_course_path,
    get_course_prerequisites,
    get_semester_plan,
    validate_courses,
)
from app.core.database import get_db
from app.models.user import User

router = APIRouter(prefix="/api")


# ── Auth ──────────────────────────────────────────────────────────────────────

@router.post("/auth/register", response_model=TokenResponse, status_code=201)
def register_endpoint(payload: RegisterRequest, db: Session = Depends(get_db)):
    return register_user(db, payload)


@router.post("/auth/login", response_model=TokenResponse)
def login_endpoint(payload: LoginRequest, db: Session = Depends(get_db)):
    return login_user(db, payload)


@router.post("/auth/logout", response_model=MessageResponse)
def logout_endpoint():
    # Tokens are stateless JWTs; clients discard theirs
    return MessageResponse(message="Logged out successfully")


@router.get("/auth/me", response_model=UserOut)
def me_endpoint(current_user: User = Depends(get_current_user)):
    return current_user


# ── Courses ───────────────────────────────────────────────────────────────────

@router.get("/courses", response_model=list[CourseResponse])
def list_courses_endpoint(db: Session = Depends(get_db)):
    return list_courses(db)


@router.post("/courses", response_model=CourseMutationResponse, status_code=201)
def create_course_endpoint(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    course = create_course(db, payload)
    return CourseMutationResponse(
        message="Course added successfully",
        course=CourseResponse.model_validate(course),
    )


# NOTE: literal path segments (/courses/validate, /courses/order, ...) MUST be
# registered BEFORE the parametric route /courses/{course_id}.

@router.post("/courses/validate", response_model=ValidationResult)
def validate_courses_endpoint(payload: list[CourseSnapshot]):
    return validate_courses(payload)


@router.get("/courses/order", response_model=CourseOrderResponse)
def course_order_endpoint(db: Session = Depends(get_db)):
    return get_course_order(db)


@router.get("/courses/plan", response_model=SemesterPlanResponse)
def semester_plan_endpoint(db: Session = Depends(get_db)):
    return get_semester_plan(db)


@router.get("/courses/analysis", response_model=CatalogAnalysis)
def analysis_endpoint(db: Session = Depends(get_db)):
    return analyze_catalog(db)


@router.get("/courses/path", response_model=PathResponse)
def course_path_endpoint(
    start: str = Query(..., description="Course id the path starts from"),
    end: str = Query(..., description="Course id the path ends at"),
    db: Session = Depends(get_db),
):
    return get_course_path(db, start, end)


@router.get("/courses/{course_id}", response_model=CourseResponse)
def get_course_endpoint(course_id: str, db: Session = Depends(get_db)):
    return get_course(db, course_id)


@router.put("/courses/{course_id}", response_model=CourseMutationResponse)
def update_course_endpoint(
    course_id: str,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    course = update_course(db, course_id, payload)
    return CourseMutationResponse(
        message="Course updated successfully",
        course=CourseResponse.model_validate(course),
    )


@router.delete("/courses/{course_id}", response_model=MessageResponse)
def delete_course_endpoint(
    course_id: str,
    db: Session = Depends(get_db),
    _user: User = Depends(get_current_user),
):
    delete_course(db, course_id)
    return MessageResponse(message="Course deleted successfully")


@router.get("/courses/{course_id}/prerequisites", response_model=PrerequisitesResponse)
def course_prerequisites_endpoint(course_id: str, db: Session = Depends(get_db)):
    return get_course_prerequisites(db, course_id)
