from datetime import datetime

from pydantic import BaseModel, Field


class EnrollmentCreate(BaseModel):
    class_id: str = Field(min_length=1)


class EnrollmentOut(BaseModel):
    id: int
    student_id: int
    classroom_id: int
    enrollment_date: datetime
    grade: str | None = None
    progress: int

    class Config:
        from_attributes = True
