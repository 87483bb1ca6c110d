from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from exam_service.core.database import Base, JSONType

class Question(Base):
    __tablename__ = "questions"
    __table_args__ = (
        UniqueConstraint("assessment_id", "question_number", name="uq_questions_assessment_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id"), nullable=False, index=True)
    question_number = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    options = Column(JSONType, nullable=False, default=list)
    answer = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    assessment = relationship("Assessment", back_populates="questions")
