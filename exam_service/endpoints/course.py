from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from exam_service.schemas.response import APIResponse
from exam_service.schemas.course import CourseSummary, CourseUnits
from exam_service.schemas.user import UserContext
from exam_service.services.course import course_service
from exam_service.utils import deps

router = APIRouter()


@router.get("/", response_model=APIResponse[List[CourseSummary]])
async def get_courses(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    courses = course_service.get_courses(db)
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.get("/{course_id}/units", response_model=APIResponse[CourseUnits])
async def get_course_units(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    context: UserContext = Depends(deps.get_current_user_with_context)
):
    units = course_service.get_course_units(db, course_id)
    return APIResponse(message="Course units retrieved successfully", data=units)
