from sqlalchemy.orm import Session
from typing import List

from pydantic import BaseModel

from exam_service.crud.base import CRUDBase
from exam_service.models.course import Course, course_students_association


class CRUDCourse(CRUDBase[Course, BaseModel, BaseModel]):

    def get_all(self, db: Session) -> List[Course]:
        return db.query(Course).order_by(Course.id).all()

    def get_student_course_ids(self, db: Session, user_id: int) -> List[int]:
        rows = (
            db.query(course_students_association.c.course_id)
            .filter(course_students_association.c.user_id == user_id)
            .all()
        )
        return [row[0] for row in rows]

course = CRUDCourse(Course)
