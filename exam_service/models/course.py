from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from exam_service.core.database import Base, JSONType

course_students_association = Table(
    "course_students_association",
    Base.metadata,
    Column("course_id", Integer, ForeignKey("courses.id"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    course_name = Column(String, index=True, nullable=False)
    course_units = Column(JSONType, nullable=False, default=list)
    course_unit_code = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    students = relationship("User", secondary=course_students_association, back_populates="enrolled_courses")
    assessments = relationship("Assessment", back_populates="course")
    manual_assessments = relationship("ManualAssessment", back_populates="course")

    @property
    def total_enrolled_students(self):
        return len(self.students)
