from typing import List
from sqlalchemy.orm import Session

from exam_service.core.exceptions import NotFoundError
from exam_service.crud.course import course as crud_course
from exam_service.schemas.course import CourseSummary, CourseUnit, CourseUnits


class CourseService:

    def get_courses(self, db: Session) -> List[CourseSummary]:
        return [CourseSummary.model_validate(c) for c in crud_course.get_all(db)]

    def get_course_units(self, db: Session, course_id: int) -> CourseUnits:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise NotFoundError("Course not found")

        return CourseUnits(
            course_units=[
                CourseUnit(id=index + 1, unit_name=unit_name, unit_code=course.course_unit_code)
                for index, unit_name in enumerate(course.course_units or [])
            ]
        )


course_service = CourseService()
