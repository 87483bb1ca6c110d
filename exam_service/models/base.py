# Import every model so relationship targets resolve and Base.metadata is complete.
from exam_service.core.database import Base  # noqa: F401
from exam_service.models.course import Course, course_students_association  # noqa: F401
from exam_service.models.user import User  # noqa: F401
from exam_service.models.assessment import Assessment  # noqa: F401
from exam_service.models.question import Question  # noqa: F401
from exam_service.models.manual_assessment import ManualAssessment, ManualQuestion  # noqa: F401
