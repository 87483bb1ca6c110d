from pydantic import BaseModel, ConfigDict
from typing import List, Optional

class CourseSummary(BaseModel):
    id: int
    course_name: str

    model_config = ConfigDict(from_attributes=True)

class CourseUnit(BaseModel):
    id: int
    unit_name: str
    unit_code: Optional[str] = None

class CourseUnits(BaseModel):
    course_units: List[CourseUnit]
