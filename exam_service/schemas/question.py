from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List

class QuestionBase(BaseModel):
    content: str
    options: List[str] = Field(default_factory=list)
    answer: str = ""

class ParsedQuestion(QuestionBase):
    """A question record recovered from one CSV row."""

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Question content cannot be empty")
        return v

class QuestionUpdate(BaseModel):
    content: Optional[str] = None
    options: Optional[List[str]] = None
    answer: Optional[str] = None

class Question(QuestionBase):
    id: int
    assessment_id: int
    question_number: int

    model_config = ConfigDict(from_attributes=True)

class QuestionWithoutAnswer(BaseModel):
    """Student-facing projection; carries no answer field at all."""
    id: int
    assessment_id: int
    question_number: int
    content: str
    options: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
