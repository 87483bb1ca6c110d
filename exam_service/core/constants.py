from enum import Enum


SCHEDULE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SCHEDULE_TIME_FORMAT = "%H:%M:%S"

# Column order the exporter splits the options array across.
CSV_OPTION_FIELDS = ("options", "_3", "_4", "_5", "_6", "_7")


class RoleEnum(str, Enum):
    ADMIN = "admin"
    LECTURER = "lecturer"
    STUDENT = "student"


class ExamPaperStatusEnum(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
