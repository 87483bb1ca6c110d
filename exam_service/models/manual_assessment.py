from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from exam_service.core.database import Base, JSONType

class ManualAssessment(Base):
    __tablename__ = "manual_assessments"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    course_unit = Column(String, nullable=False)
    course_unit_code = Column(String, nullable=False)
    duration = Column(Integer, nullable=False)
    scheduled_date = Column(DateTime, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    created_by = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    course = relationship("Course", back_populates="manual_assessments")
    questions = relationship(
        "ManualQuestion",
        back_populates="assessment",
        cascade="all, delete-orphan",
        order_by="ManualQuestion.question_number",
    )


class ManualQuestion(Base):
    __tablename__ = "manual_questions"

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("manual_assessments.id"), nullable=False, index=True)
    question_number = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)
    options = Column(JSONType, nullable=False, default=list)
    correct_answer = Column(Text, nullable=False, default="")

    assessment = relationship("ManualAssessment", back_populates="questions")
