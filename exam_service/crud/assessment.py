from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from exam_service.core.exceptions import HasDependentQuestionsError
from exam_service.crud.base import CRUDBase
from exam_service.crud.question import question as crud_question
from exam_service.models.assessment import Assessment
from exam_service.models.question import Question
from exam_service.schemas.assessment import ExamPaperUpload, ExamPaperUpdate
from exam_service.schemas.question import QuestionBase
from exam_service.utils.numbering import number_in_order


class CRUDAssessment(CRUDBase[Assessment, ExamPaperUpload, ExamPaperUpdate]):

    def _query_with_questions(self, db: Session):
        return db.query(Assessment).options(selectinload(Assessment.questions))

    def get(self, db: Session, id: int) -> Optional[Assessment]:
        return self._query_with_questions(db).filter(Assessment.id == id).first()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Assessment]:
        return (
            self._query_with_questions(db)
            .order_by(Assessment.id)
            .offset(skip)
            .limit(limit)
            .all()
        )

    def create_with_questions(
        self,
        db: Session,
        *,
        obj_in: Dict[str, Any],
        questions: Iterable[QuestionBase],
        commit: bool = True,
    ) -> Assessment:
        """Insert an assessment and its questions as a single unit.

        Questions are numbered 1..N in iteration order. Nothing is left behind
        if any insert fails.
        """
        try:
            db_obj = Assessment(**obj_in)
            db.add(db_obj)
            db.flush()

            db.add_all([
                Question(
                    assessment_id=db_obj.id,
                    question_number=number,
                    content=item.content,
                    options=list(item.options),
                    answer=item.answer or "",
                )
                for number, item in number_in_order(questions)
            ])
            db.flush()

            if commit:
                db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_obj)
        return db_obj

    def delete_assessment(self, db: Session, *, id: int, commit: bool = True) -> Optional[Assessment]:
        db_obj = db.get(Assessment, id)
        if db_obj is None:
            return None

        remaining = crud_question.count_by_assessment(db, assessment_id=id)
        if remaining > 0:
            raise HasDependentQuestionsError(
                details={"assessment_id": id, "question_count": remaining}
            )

        try:
            db.delete(db_obj)
            db.flush()
            if commit:
                db.commit()
        except Exception:
            db.rollback()
            raise
        return db_obj

    def publish(self, db: Session, *, db_obj: Assessment) -> Assessment:
        if not db_obj.is_draft:
            return db_obj
        return self.update(db, db_obj=db_obj, obj_in={"is_draft": False})

    def count_ongoing(self, db: Session, *, now: datetime) -> int:
        return (
            db.query(Assessment)
            .filter(
                Assessment.is_draft.is_(False),
                Assessment.start_time <= now,
                Assessment.end_time >= now,
            )
            .count()
        )

    def count_upcoming(self, db: Session, *, now: datetime, published_only: bool = True) -> int:
        query = db.query(Assessment).filter(Assessment.scheduled_date > now)
        if published_only:
            query = query.filter(Assessment.is_draft.is_(False))
        return query.count()


assessment = CRUDAssessment(Assessment)
