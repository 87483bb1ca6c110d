from fastapi import HTTPException, status

from exam_service.core.constants import RoleEnum
from exam_service.schemas.user import UserContext


class PermissionHelper:
    @staticmethod
    def is_student(context: UserContext) -> bool:
        return context.role == RoleEnum.STUDENT

    @staticmethod
    def require_not_student(context: UserContext, message: str = "Students cannot manage exam papers.") -> None:
        if PermissionHelper.is_student(context):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)

    @staticmethod
    def require_self_or_staff(context: UserContext, user_id: int) -> None:
        if PermissionHelper.is_student(context) and context.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Students can only view their own upcoming exams."
            )
