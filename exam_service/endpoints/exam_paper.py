from typing import List, Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from exam_service.schemas.response import APIResponse
from exam_service.utils import deps
from exam_service.schemas.assessment import ExamPaper, ExamPaperPreview, ExamPaperStats, ExamPaperUpdate, ExamPaperUpload
from exam_service.schemas.question import Question, QuestionUpdate, QuestionWithoutAnswer
from exam_service.schemas.user import UserContext
from exam_service.services.exam_paper import exam_paper_service
from exam_service.utils.logger import setup_logger
from exam_service.utils.permission import PermissionHelper as permission_helper

logger = setup_logger("exam_paper_upload", "uploads.log")

router = APIRouter()


@router.post("/upload", response_model=APIResponse[ExamPaperPreview], status_code=status.HTTP_201_CREATED)
async def upload_exam_paper(
    *,
    db: Session = Depends(deps.get_transactional_db),
    file: Optional[UploadFile] = File(None),
    metadata: ExamPaperUpload = Depends(ExamPaperUpload.as_form),
    context: UserContext = Depends(deps.get_staff_context)
):
    filename = file.filename if file else None
    logger.info(f"User {context.user_id} uploading exam paper '{metadata.title}' from {filename}")
    try:
        exam_paper = exam_paper_service.upload_exam_paper(
            db,
            filename=filename,
            stream=file.file if file else None,
            metadata=metadata,
        )
    finally:
        if file:
            await file.close()
    return APIResponse(message="Exam paper uploaded successfully", data=ExamPaperPreview.model_validate(exam_paper))


@router.get("/", response_model=APIResponse[List[ExamPaperPreview]])
async def get_all_exam_papers(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_staff_context),
    skip: int = 0,
    limit: int = 100
):
    exam_papers = exam_paper_service.get_all_exam_papers(db, skip=skip, limit=limit)
    return APIResponse(
        message="Exam papers retrieved successfully",
        data=[ExamPaperPreview.model_validate(e) for e in exam_papers]
    )


@router.get("/stats", response_model=APIResponse[ExamPaperStats])
async def count_all_exam_papers(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_staff_context)
):
    stats = exam_paper_service.count_all_exam_papers(db)
    return APIResponse(message="Exam paper statistics retrieved successfully", data=stats)


@router.get("/stats/ongoing", response_model=APIResponse[int])
async def get_ongoing_count(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    count = exam_paper_service.get_ongoing_count(db)
    return APIResponse(message="Ongoing assessments counted successfully", data=count)


@router.get("/stats/upcoming", response_model=APIResponse[int])
async def get_upcoming_count(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    count = exam_paper_service.get_upcoming_count(db)
    return APIResponse(message="Upcoming assessments counted successfully", data=count)


@router.get("/{exam_paper_id}/preview", response_model=APIResponse[ExamPaperPreview])
async def preview_exam_paper(
    *,
    db: Session = Depends(deps.get_db),
    exam_paper_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    exam_paper = exam_paper_service.preview_exam_paper(db, exam_paper_id)
    return APIResponse(message="Exam paper retrieved successfully", data=ExamPaperPreview.model_validate(exam_paper))


@router.put("/{exam_paper_id}", response_model=APIResponse[ExamPaper])
async def update_exam_paper(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_paper_id: int,
    exam_paper_in: ExamPaperUpdate,
    context: UserContext = Depends(deps.get_staff_context)
):
    exam_paper = exam_paper_service.update_exam_paper(db, exam_paper_id, exam_paper_in)
    return APIResponse(message="Exam paper updated successfully", data=ExamPaper.model_validate(exam_paper))


@router.delete("/{exam_paper_id}", response_model=APIResponse[None])
async def delete_exam_paper(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_paper_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    exam_paper_service.delete_exam_paper(db, exam_paper_id)
    return APIResponse(message="Exam paper deleted successfully")


@router.patch("/{exam_paper_id}/publish", response_model=APIResponse[ExamPaper])
async def publish_exam_paper(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_paper_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    exam_paper = exam_paper_service.publish_exam_paper(db, exam_paper_id)
    return APIResponse(message="Exam paper published successfully", data=ExamPaper.model_validate(exam_paper))


@router.get("/{exam_paper_id}/questions", response_model=APIResponse[List[Question]])
async def preview_questions(
    *,
    db: Session = Depends(deps.get_db),
    exam_paper_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    questions = exam_paper_service.preview_questions(db, exam_paper_id)
    return APIResponse(message="Questions retrieved successfully", data=[Question.model_validate(q) for q in questions])


@router.get("/{exam_paper_id}/questions/no-answer", response_model=APIResponse[List[QuestionWithoutAnswer]])
async def questions_without_answer(
    *,
    db: Session = Depends(deps.get_db),
    exam_paper_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    questions = exam_paper_service.questions_without_answer(
        db, exam_paper_id, published_only=permission_helper.is_student(context)
    )
    return APIResponse(message="Questions retrieved successfully", data=questions)


@router.delete("/{exam_paper_id}/questions", response_model=APIResponse[int])
async def delete_all_questions(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_paper_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    deleted = exam_paper_service.delete_all_questions(db, exam_paper_id)
    return APIResponse(message="All questions deleted successfully", data=deleted)


@router.get("/{exam_paper_id}/questions/{question_id}", response_model=APIResponse[Question])
async def get_question(
    *,
    db: Session = Depends(deps.get_db),
    exam_paper_id: int,
    question_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    question = exam_paper_service.get_question(db, exam_paper_id, question_id)
    return APIResponse(message="Question retrieved successfully", data=Question.model_validate(question))


@router.put("/{exam_paper_id}/questions/{question_id}", response_model=APIResponse[Question])
async def update_question(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_paper_id: int,
    question_id: int,
    question_in: QuestionUpdate,
    context: UserContext = Depends(deps.get_staff_context)
):
    question = exam_paper_service.update_question(db, exam_paper_id, question_id, question_in)
    return APIResponse(message="Question updated successfully", data=Question.model_validate(question))


@router.delete("/{exam_paper_id}/questions/{question_id}", response_model=APIResponse[None])
async def delete_question(
    *,
    db: Session = Depends(deps.get_transactional_db),
    exam_paper_id: int,
    question_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    exam_paper_service.delete_question(db, exam_paper_id, question_id)
    return APIResponse(message="Question deleted successfully and questions renumbered")
