from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SubmissionCreate(BaseModel):
    content: Optional[str] = None


class SubmissionRead(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    content: Optional[str]
    submission_date: datetime
    marks: Optional[int] = None
    feedback: Optional[str] = None

    class Config:
        from_attributes = True


class SubmissionGradeUpdate(BaseModel):
    marks: int = Field(ge=0)
    feedback: Optional[str] = None
