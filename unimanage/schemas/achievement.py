from datetime import datetime

from pydantic import BaseModel, Field


class AchievementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    # negative awards are rejected here; the store also clamps balances at zero
    points: int = Field(ge=0)


class AchievementRead(BaseModel):
    id: int
    student_id: int
    title: str
    description: str | None = None
    points: int
    date: datetime

    class Config:
        from_attributes = True
