from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class AssignmentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    total_marks: Optional[int] = Field(default=None, ge=0)
    weightage: Optional[int] = Field(default=None, ge=0, le=100)


class AssignmentRead(BaseModel):
    id: int
    classroom_id: int
    title: str
    description: Optional[str]
    due_date: Optional[datetime]
    total_marks: Optional[int]
    weightage: Optional[int]
    created_at: datetime

    class Config:
        from_attributes = True
