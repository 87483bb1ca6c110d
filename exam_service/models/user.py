from sqlalchemy import Column, Integer, String, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from exam_service.core.database import Base
from exam_service.core.constants import RoleEnum
from exam_service.models.course import course_students_association

class User(Base):
    """Local mirror of identity-provider accounts, kept for course rosters."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(Enum(RoleEnum), nullable=False, default=RoleEnum.STUDENT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    enrolled_courses = relationship("Course", secondary=course_students_association, back_populates="students")
