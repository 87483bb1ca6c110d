from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from exam_service.schemas.assessment import ScheduleDisplayMixin

class ManualQuestionIn(BaseModel):
    question_text: str
    options: List[str] = Field(default_factory=list)
    correct_answer: str = ""

class ManualAssessmentBase(BaseModel):
    title: str
    description: Optional[str] = None
    course_id: int
    course_unit: str
    course_unit_code: str
    duration: int = Field(..., ge=0)
    created_by: str

class ManualAssessmentCreate(ManualAssessmentBase):
    scheduled_date: str
    start_time: str
    end_time: str
    questions: List[ManualQuestionIn] = Field(default_factory=list)

class ManualAssessmentUpdate(BaseModel):
    """Partial update: only fields present in the request are applied.

    ``null`` counts as absent; ``0`` and ``""`` are real values.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    course_id: Optional[int] = None
    course_unit: Optional[str] = None
    course_unit_code: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    created_by: Optional[str] = None
    scheduled_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    questions: Optional[List[ManualQuestionIn]] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)

class ManualQuestion(ManualQuestionIn):
    id: int
    question_number: int

    model_config = ConfigDict(from_attributes=True)

class ManualAssessment(ScheduleDisplayMixin, ManualAssessmentBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    questions: List[ManualQuestion] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

class UpcomingExam(ScheduleDisplayMixin):
    title: str
    course_name: str
