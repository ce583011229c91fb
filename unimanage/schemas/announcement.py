from datetime import datetime

from pydantic import BaseModel, Field


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class AnnouncementRead(BaseModel):
    id: int
    classroom_id: int
    title: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
