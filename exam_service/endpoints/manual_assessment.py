from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from exam_service.schemas.response import APIResponse
from exam_service.utils import deps
from exam_service.schemas.manual_assessment import (
    ManualAssessment,
    ManualAssessmentCreate,
    ManualAssessmentUpdate,
    UpcomingExam,
)
from exam_service.schemas.user import UserContext
from exam_service.services.manual_assessment import manual_assessment_service
from exam_service.utils.permission import PermissionHelper as permission_helper

router = APIRouter()


@router.post("/", response_model=APIResponse[ManualAssessment], status_code=status.HTTP_201_CREATED)
async def create_manual_assessment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    assessment_in: ManualAssessmentCreate,
    context: UserContext = Depends(deps.get_staff_context)
):
    created = manual_assessment_service.create(db, assessment_in)
    return APIResponse(message="Assessment created successfully", data=ManualAssessment.model_validate(created))


@router.get("/", response_model=APIResponse[List[ManualAssessment]])
async def get_manual_assessments(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_staff_context),
    skip: int = 0,
    limit: int = 100
):
    assessments = manual_assessment_service.find_all(db, skip=skip, limit=limit)
    return APIResponse(
        message="Assessments retrieved successfully",
        data=[ManualAssessment.model_validate(a) for a in assessments]
    )


@router.get("/upcoming/{student_id}", response_model=APIResponse[List[UpcomingExam]])
async def find_upcoming_exams(
    *,
    db: Session = Depends(deps.get_db),
    student_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    permission_helper.require_self_or_staff(context, student_id)
    exams = manual_assessment_service.find_upcoming_exams(db, student_id)
    return APIResponse(message="Upcoming exams retrieved successfully", data=exams)


@router.get("/{assessment_id}", response_model=APIResponse[ManualAssessment])
async def get_manual_assessment(
    *,
    db: Session = Depends(deps.get_db),
    assessment_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    found = manual_assessment_service.find_one(db, assessment_id)
    return APIResponse(message="Assessment retrieved successfully", data=ManualAssessment.model_validate(found))


@router.put("/{assessment_id}", response_model=APIResponse[ManualAssessment])
async def update_manual_assessment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    assessment_id: int,
    assessment_in: ManualAssessmentUpdate,
    context: UserContext = Depends(deps.get_staff_context)
):
    updated = manual_assessment_service.update(db, assessment_id, assessment_in)
    return APIResponse(message="Assessment updated successfully", data=ManualAssessment.model_validate(updated))


@router.delete("/{assessment_id}", response_model=APIResponse[None])
async def delete_manual_assessment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    assessment_id: int,
    context: UserContext = Depends(deps.get_staff_context)
):
    manual_assessment_service.remove(db, assessment_id)
    return APIResponse(message="Assessment deleted successfully")
