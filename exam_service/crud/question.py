from typing import List, Optional
from sqlalchemy.orm import Session

from exam_service.crud.base import CRUDBase
from exam_service.models.question import Question
from exam_service.schemas.question import QuestionBase, QuestionUpdate
from exam_service.utils.numbering import renumber

class CRUDQuestion(CRUDBase[Question, QuestionBase, QuestionUpdate]):
    def get_by_assessment(self, db: Session, *, assessment_id: int) -> List[Question]:
        return (
            db.query(Question)
            .filter(Question.assessment_id == assessment_id)
            .order_by(Question.question_number)
            .all()
        )

    def get_in_assessment(self, db: Session, *, assessment_id: int, question_id: int) -> Optional[Question]:
        return (
            db.query(Question)
            .filter(Question.id == question_id, Question.assessment_id == assessment_id)
            .first()
        )

    def count_by_assessment(self, db: Session, *, assessment_id: int) -> int:
        return db.query(Question).filter(Question.assessment_id == assessment_id).count()

    def delete_and_renumber(self, db: Session, *, assessment_id: int, question_id: int, commit: bool = True) -> bool:
        """Delete one question and close the gap it leaves, as one transaction.

        The assessment's questions are locked and read once, ordered by their
        current number; survivors are then renumbered one row at a time in that
        order so the (assessment_id, question_number) unique constraint never
        sees a duplicate. Returns False when the question is not part of the
        assessment.
        """
        try:
            questions = (
                db.query(Question)
                .filter(Question.assessment_id == assessment_id)
                .order_by(Question.question_number)
                .with_for_update()
                .all()
            )
            target = next((q for q in questions if q.id == question_id), None)
            if target is None:
                return False

            db.delete(target)
            db.flush()

            survivors = [q for q in questions if q.id != question_id]
            by_id = {q.id: q for q in survivors}
            for survivor_id, new_number in renumber(survivors):
                by_id[survivor_id].question_number = new_number
                db.flush()

            if commit:
                db.commit()
        except Exception:
            db.rollback()
            raise
        return True

    def delete_all_for_assessment(self, db: Session, *, assessment_id: int, commit: bool = True) -> int:
        try:
            deleted = (
                db.query(Question)
                .filter(Question.assessment_id == assessment_id)
                .delete(synchronize_session="fetch")
            )
            if commit:
                db.commit()
        except Exception:
            db.rollback()
            raise
        return deleted

question = CRUDQuestion(Question)
