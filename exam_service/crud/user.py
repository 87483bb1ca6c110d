from sqlalchemy.orm import Session
from pydantic import BaseModel

from exam_service.core.constants import RoleEnum
from exam_service.crud.base import CRUDBase
from exam_service.models.user import User


class CRUDUser(CRUDBase[User, BaseModel, BaseModel]):
    def count_students(self, db: Session) -> int:
        return db.query(User).filter(User.role == RoleEnum.STUDENT).count()

user = CRUDUser(User)
