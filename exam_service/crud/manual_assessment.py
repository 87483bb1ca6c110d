from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from exam_service.crud.base import CRUDBase
from exam_service.models.course import Course
from exam_service.models.manual_assessment import ManualAssessment, ManualQuestion
from exam_service.schemas.manual_assessment import (
    ManualAssessmentCreate,
    ManualAssessmentUpdate,
    ManualQuestionIn,
)
from exam_service.utils.numbering import number_in_order


class CRUDManualAssessment(CRUDBase[ManualAssessment, ManualAssessmentCreate, ManualAssessmentUpdate]):

    def _query_with_questions(self, db: Session):
        return db.query(ManualAssessment).options(selectinload(ManualAssessment.questions))

    def get(self, db: Session, id: int) -> Optional[ManualAssessment]:
        return self._query_with_questions(db).filter(ManualAssessment.id == id).first()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ManualAssessment]:
        return (
            self._query_with_questions(db)
            .order_by(ManualAssessment.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    @staticmethod
    def _build_questions(questions: Iterable[ManualQuestionIn]) -> List[ManualQuestion]:
        return [
            ManualQuestion(
                question_number=number,
                question_text=item.question_text,
                options=list(item.options),
                correct_answer=item.correct_answer or "",
            )
            for number, item in number_in_order(questions)
        ]

    def create_with_questions(
        self,
        db: Session,
        *,
        obj_in: Dict[str, Any],
        questions: Iterable[ManualQuestionIn],
    ) -> ManualAssessment:
        try:
            db_obj = ManualAssessment(**obj_in)
            db_obj.questions = self._build_questions(questions)
            db.add(db_obj)
            db.flush()
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_obj)
        return db_obj

    def update_with_questions(
        self,
        db: Session,
        *,
        db_obj: ManualAssessment,
        obj_in: Dict[str, Any],
        questions: Optional[Iterable[ManualQuestionIn]] = None,
    ) -> ManualAssessment:
        """Apply field changes and, when a question list is given, replace the set."""
        try:
            for field, value in obj_in.items():
                setattr(db_obj, field, value)
            if questions is not None:
                db_obj.questions.clear()
                db.flush()
                db_obj.questions.extend(self._build_questions(questions))
            db.add(db_obj)
            db.flush()
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_obj)
        return db_obj

    def find_upcoming_for_courses(self, db: Session, *, course_ids: List[int], now: datetime) -> List[Any]:
        if not course_ids:
            return []
        return (
            db.query(
                ManualAssessment.title,
                ManualAssessment.scheduled_date,
                ManualAssessment.start_time,
                ManualAssessment.end_time,
                Course.course_name,
            )
            .join(Course, ManualAssessment.course_id == Course.id)
            .filter(ManualAssessment.course_id.in_(course_ids))
            .filter(ManualAssessment.scheduled_date >= now)
            .order_by(ManualAssessment.scheduled_date.asc())
            .all()
        )


manual_assessment = CRUDManualAssessment(ManualAssessment)
