from datetime import datetime

from pydantic import BaseModel, Field


class MaterialCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    type: str = Field(min_length=1, max_length=50)
    content: str = Field(min_length=1)


class MaterialRead(BaseModel):
    id: int
    classroom_id: int
    title: str
    description: str | None = None
    type: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
