from app.models.course import Course
from app.models.user import User

__all__ = ["Course", "User"]
