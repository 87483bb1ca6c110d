import logging
from datetime import datetime
from typing import BinaryIO, List, Optional

from sqlalchemy.orm import Session

from exam_service.core.exceptions import (
    EmptyQuestionSetError,
    InvalidFileError,
    NotFoundError,
)
from exam_service.crud.assessment import assessment as crud_assessment
from exam_service.crud.course import course as crud_course
from exam_service.crud.question import question as crud_question
from exam_service.crud.user import user as crud_user
from exam_service.models.assessment import Assessment
from exam_service.models.question import Question
from exam_service.schemas.assessment import ExamPaperStats, ExamPaperUpdate, ExamPaperUpload
from exam_service.schemas.question import QuestionUpdate, QuestionWithoutAnswer
from exam_service.services.csv_questions import CsvQuestionParser, csv_question_parser
from exam_service.services.schedule import ScheduleValidator, schedule_validator

logger = logging.getLogger(__name__)


class ExamPaperService:
    """Exam papers built from uploaded question sheets.

    An exam paper starts as a draft and can be published once; its questions
    always carry the numbers 1..N.
    """

    def __init__(
        self,
        parser: CsvQuestionParser = csv_question_parser,
        validator: ScheduleValidator = schedule_validator,
    ):
        self.parser = parser
        self.validator = validator

    def _get_exam_paper_or_404(self, db: Session, exam_paper_id: int) -> Assessment:
        exam_paper = crud_assessment.get(db, id=exam_paper_id)
        if not exam_paper:
            raise NotFoundError("Exam paper not found")
        return exam_paper

    def _get_question_or_404(self, db: Session, exam_paper_id: int, question_id: int) -> Question:
        self._get_exam_paper_or_404(db, exam_paper_id)
        question = crud_question.get_in_assessment(db, assessment_id=exam_paper_id, question_id=question_id)
        if not question:
            raise NotFoundError("Question not found in this exam paper")
        return question

    def _get_ordered_questions_or_404(self, db: Session, exam_paper_id: int) -> List[Question]:
        questions = crud_question.get_by_assessment(db, assessment_id=exam_paper_id)
        if not questions:
            raise NotFoundError("No questions found for this assessment")
        return questions

    def upload_exam_paper(
        self,
        db: Session,
        *,
        filename: Optional[str],
        stream: Optional[BinaryIO],
        metadata: ExamPaperUpload,
    ) -> Assessment:
        if stream is None or not filename or not filename.lower().endswith(".csv"):
            raise InvalidFileError()

        questions = list(self.parser.parse(stream))
        if not questions:
            raise EmptyQuestionSetError()

        schedule = self.validator.validate_window(
            metadata.scheduled_date, metadata.start_time, metadata.end_time
        )

        if not crud_course.get(db, id=metadata.course_id):
            raise NotFoundError("Course not found")

        exam_paper = crud_assessment.create_with_questions(
            db,
            obj_in={
                "title": metadata.title,
                "description": metadata.description,
                "course_id": metadata.course_id,
                "course_unit": metadata.course_unit,
                "course_unit_code": metadata.course_unit_code,
                "duration": metadata.duration,
                "created_by": metadata.created_by,
                "scheduled_date": schedule.scheduled_date,
                "start_time": schedule.start_time,
                "end_time": schedule.end_time,
                "is_draft": metadata.is_draft,
            },
            questions=questions,
        )
        logger.info(
            f"Exam paper {exam_paper.id} created from {filename} with {len(questions)} questions"
        )
        return crud_assessment.get(db, id=exam_paper.id)

    def get_all_exam_papers(self, db: Session, skip: int = 0, limit: int = 100) -> List[Assessment]:
        return crud_assessment.get_multi(db, skip=skip, limit=limit)

    def update_exam_paper(self, db: Session, exam_paper_id: int, exam_paper_in: ExamPaperUpdate) -> Assessment:
        exam_paper = self._get_exam_paper_or_404(db, exam_paper_id)
        changes = exam_paper_in.model_dump(exclude_unset=True, exclude_none=True)
        return crud_assessment.update(db, db_obj=exam_paper, obj_in=changes)

    def delete_exam_paper(self, db: Session, exam_paper_id: int) -> None:
        self._get_exam_paper_or_404(db, exam_paper_id)
        crud_assessment.delete_assessment(db, id=exam_paper_id)
        logger.info(f"Exam paper {exam_paper_id} deleted")

    def publish_exam_paper(self, db: Session, exam_paper_id: int) -> Assessment:
        exam_paper = self._get_exam_paper_or_404(db, exam_paper_id)
        return crud_assessment.publish(db, db_obj=exam_paper)

    def preview_exam_paper(self, db: Session, exam_paper_id: int) -> Assessment:
        return self._get_exam_paper_or_404(db, exam_paper_id)

    def get_question(self, db: Session, exam_paper_id: int, question_id: int) -> Question:
        return self._get_question_or_404(db, exam_paper_id, question_id)

    def update_question(
        self, db: Session, exam_paper_id: int, question_id: int, question_in: QuestionUpdate
    ) -> Question:
        question = self._get_question_or_404(db, exam_paper_id, question_id)
        changes = question_in.model_dump(exclude_unset=True, exclude_none=True)
        # A blank or missing answer is stored as "", never left unset.
        changes["answer"] = question_in.answer or ""
        return crud_question.update(db, db_obj=question, obj_in=changes)

    def delete_question(self, db: Session, exam_paper_id: int, question_id: int) -> None:
        self._get_question_or_404(db, exam_paper_id, question_id)
        deleted = crud_question.delete_and_renumber(db, assessment_id=exam_paper_id, question_id=question_id)
        if not deleted:
            raise NotFoundError("Question not found in this exam paper")
        logger.info(f"Question {question_id} removed from exam paper {exam_paper_id}; questions renumbered")

    def delete_all_questions(self, db: Session, exam_paper_id: int) -> int:
        self._get_exam_paper_or_404(db, exam_paper_id)
        deleted = crud_question.delete_all_for_assessment(db, assessment_id=exam_paper_id)
        logger.info(f"Deleted {deleted} questions from exam paper {exam_paper_id}")
        return deleted

    def preview_questions(self, db: Session, exam_paper_id: int) -> List[Question]:
        return self._get_ordered_questions_or_404(db, exam_paper_id)

    def questions_without_answer(
        self, db: Session, exam_paper_id: int, published_only: bool = False
    ) -> List[QuestionWithoutAnswer]:
        """Answer-free projection; with ``published_only`` a draft paper reads as missing."""
        if published_only:
            exam_paper = self._get_exam_paper_or_404(db, exam_paper_id)
            if exam_paper.is_draft:
                raise NotFoundError("Exam paper not found")
        questions = self._get_ordered_questions_or_404(db, exam_paper_id)
        return [QuestionWithoutAnswer.model_validate(q) for q in questions]

    def get_ongoing_count(self, db: Session, now: Optional[datetime] = None) -> int:
        return crud_assessment.count_ongoing(db, now=now or datetime.now())

    def get_upcoming_count(self, db: Session, now: Optional[datetime] = None) -> int:
        return crud_assessment.count_upcoming(db, now=now or datetime.now())

    def count_all_exam_papers(self, db: Session, now: Optional[datetime] = None) -> ExamPaperStats:
        return ExamPaperStats(
            courses_count=crud_course.count(db),
            students_count=crud_user.count_students(db),
            upcoming_exams_count=crud_assessment.count_upcoming(
                db, now=now or datetime.now(), published_only=False
            ),
        )


exam_paper_service = ExamPaperService()
