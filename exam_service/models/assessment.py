from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from exam_service.core.database import Base
from exam_service.core.constants import ExamPaperStatusEnum

class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    course_unit = Column(String, nullable=False)
    course_unit_code = Column(String, nullable=False)
    duration = Column(Integer, nullable=False)  # minutes
    scheduled_date = Column(DateTime, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    created_by = Column(String, nullable=False)
    is_draft = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    course = relationship("Course", back_populates="assessments")
    # No delete cascade: an exam paper may only be removed once it is empty.
    questions = relationship(
        "Question",
        back_populates="assessment",
        order_by="Question.question_number",
    )

    @property
    def status(self) -> ExamPaperStatusEnum:
        return ExamPaperStatusEnum.DRAFT if self.is_draft else ExamPaperStatusEnum.PUBLISHED
