from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer
from typing import Optional, List
from datetime import datetime
from fastapi import Form
from fastapi.exceptions import RequestValidationError

from exam_service.core.constants import ExamPaperStatusEnum, SCHEDULE_DATE_FORMAT, SCHEDULE_TIME_FORMAT
from exam_service.schemas.question import Question

class ExamPaperBase(BaseModel):
    title: str
    description: Optional[str] = None
    course_id: int
    course_unit: str
    course_unit_code: str
    duration: int = Field(..., ge=0, description="Duration in minutes")
    created_by: str

class ExamPaperUpload(ExamPaperBase):
    """Metadata sent alongside the CSV file.

    Schedule fields arrive as strings and are checked by the schedule
    validator, not by Pydantic, so malformed values map to the dedicated
    schedule errors.
    """
    scheduled_date: str
    start_time: str
    end_time: str
    is_draft: bool = True

    @classmethod
    def as_form(
        cls,
        title: str = Form(...),
        description: Optional[str] = Form(None),
        course_id: int = Form(...),
        course_unit: str = Form(...),
        course_unit_code: str = Form(...),
        duration: int = Form(..., ge=0),
        created_by: str = Form(...),
        scheduled_date: str = Form(...),
        start_time: str = Form(...),
        end_time: str = Form(...),
        is_draft: bool = Form(True),
    ) -> "ExamPaperUpload":
        try:
            return cls(
                title=title,
                description=description,
                course_id=course_id,
                course_unit=course_unit,
                course_unit_code=course_unit_code,
                duration=duration,
                created_by=created_by,
                scheduled_date=scheduled_date,
                start_time=start_time,
                end_time=end_time,
                is_draft=is_draft,
            )
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False))

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Data Structures Midterm",
                "description": "Covers weeks 1-6",
                "course_id": 1,
                "course_unit": "Data Structures",
                "course_unit_code": "CSC2101",
                "duration": 120,
                "created_by": "Dr. Achieng",
                "scheduled_date": "2025-01-01 00:00:00",
                "start_time": "09:00:00",
                "end_time": "11:00:00",
                "is_draft": True
            }
        }

class ExamPaperUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    course_unit: Optional[str] = None
    course_unit_code: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    created_by: Optional[str] = None

class ScheduleDisplayMixin(BaseModel):
    scheduled_date: datetime
    start_time: datetime
    end_time: datetime

    @field_serializer("scheduled_date")
    def _render_date(self, value: datetime) -> str:
        return value.strftime(SCHEDULE_DATE_FORMAT)

    @field_serializer("start_time", "end_time")
    def _render_time(self, value: datetime) -> str:
        return value.strftime(SCHEDULE_TIME_FORMAT)

class ExamPaper(ScheduleDisplayMixin, ExamPaperBase):
    id: int
    is_draft: bool
    status: ExamPaperStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ExamPaperPreview(ExamPaper):
    questions: List[Question] = Field(default_factory=list)

class ExamPaperStats(BaseModel):
    courses_count: int
    students_count: int
    upcoming_exams_count: int
