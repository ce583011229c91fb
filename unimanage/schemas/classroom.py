from datetime import datetime

from pydantic import BaseModel, Field


class ClassroomCreate(BaseModel):
    class_id: str = Field(min_length=2, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    department_id: int | None = None
    faculty_id: int | None = None
    semester: str = Field(min_length=1, max_length=50)
    year: str = Field(min_length=1, max_length=10)
    description: str | None = None
    schedule: str | None = None


class ClassroomRead(BaseModel):
    id: int
    class_id: str
    name: str
    department_id: int | None = None
    faculty_id: int | None = None
    semester: str
    year: str
    description: str | None = None
    schedule: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True
