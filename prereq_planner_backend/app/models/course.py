from sqlalchemy import JSON, Column, Integer, String, Text

from app.models.base import Base


class Course(Base):
    __tablename__ = "courses"

    # Surrogate key keeps catalog insertion order stable for ordering
    row_id = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    credits = Column(Integer, nullable=False, default=3)
    description = Column(Text, nullable=False, default="")
    prerequisites = Column(JSON, nullable=False, default=list)
