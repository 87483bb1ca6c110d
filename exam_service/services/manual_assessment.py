import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from exam_service.core.exceptions import NotFoundError
from exam_service.crud.course import course as crud_course
from exam_service.crud.manual_assessment import manual_assessment as crud_manual_assessment
from exam_service.models.manual_assessment import ManualAssessment
from exam_service.schemas.manual_assessment import (
    ManualAssessmentCreate,
    ManualAssessmentUpdate,
    UpcomingExam,
)
from exam_service.services.schedule import ScheduleValidator, format_date, format_time, schedule_validator

logger = logging.getLogger(__name__)

SCHEDULE_FIELDS = ("scheduled_date", "start_time", "end_time")


class ManualAssessmentService:

    def __init__(self, validator: ScheduleValidator = schedule_validator):
        self.validator = validator

    def _require_course(self, db: Session, course_id: int) -> None:
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found")

    def create(self, db: Session, assessment_in: ManualAssessmentCreate) -> ManualAssessment:
        schedule = self.validator.validate_window(
            assessment_in.scheduled_date, assessment_in.start_time, assessment_in.end_time
        )
        self._require_course(db, assessment_in.course_id)

        data = assessment_in.model_dump(exclude={"questions", *SCHEDULE_FIELDS})
        data.update(schedule._asdict())
        created = crud_manual_assessment.create_with_questions(
            db, obj_in=data, questions=assessment_in.questions
        )
        logger.info(f"Manual assessment {created.id} created with {len(assessment_in.questions)} questions")
        return created

    def find_all(self, db: Session, skip: int = 0, limit: int = 100) -> List[ManualAssessment]:
        return crud_manual_assessment.get_multi(db, skip=skip, limit=limit)

    def find_one(self, db: Session, assessment_id: int) -> ManualAssessment:
        found = crud_manual_assessment.get(db, id=assessment_id)
        if not found:
            raise NotFoundError(f"Assessment with ID {assessment_id} not found")
        return found

    def update(self, db: Session, assessment_id: int, assessment_in: ManualAssessmentUpdate) -> ManualAssessment:
        existing = self.find_one(db, assessment_id)
        changes = assessment_in.changes()
        changes.pop("questions", None)

        if any(field in changes for field in SCHEDULE_FIELDS):
            schedule = self.validator.validate_window(
                changes.pop("scheduled_date", format_date(existing.scheduled_date)),
                changes.pop("start_time", format_time(existing.start_time)),
                changes.pop("end_time", format_time(existing.end_time)),
            )
            changes.update(schedule._asdict())

        if "course_id" in changes and changes["course_id"] != existing.course_id:
            self._require_course(db, changes["course_id"])

        return crud_manual_assessment.update_with_questions(
            db, db_obj=existing, obj_in=changes, questions=assessment_in.questions
        )

    def remove(self, db: Session, assessment_id: int) -> None:
        self.find_one(db, assessment_id)
        crud_manual_assessment.delete(db, id=assessment_id)
        logger.info(f"Manual assessment {assessment_id} removed")

    def find_upcoming_exams(
        self, db: Session, student_id: int, now: Optional[datetime] = None
    ) -> List[UpcomingExam]:
        course_ids = crud_course.get_student_course_ids(db, user_id=student_id)
        rows = crud_manual_assessment.find_upcoming_for_courses(
            db, course_ids=course_ids, now=now or datetime.now()
        )
        return [
            UpcomingExam(
                title=row.title,
                scheduled_date=row.scheduled_date,
                start_time=row.start_time,
                end_time=row.end_time,
                course_name=row.course_name,
            )
            for row in rows
        ]


manual_assessment_service = ManualAssessmentService()
