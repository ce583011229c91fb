from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6, max_length=128)
    email: EmailStr
    role: Literal["admin", "faculty", "student"]
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    profile_picture: Optional[str] = None

    # profile fields, used according to role
    department_id: Optional[int] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    student_id: Optional[str] = Field(default=None, min_length=3, max_length=50)
    year: Optional[int] = Field(default=None, ge=1, le=10)


class UserRead(BaseModel):
    id: int
    username: str
    email: str
    role: str
    first_name: str
    last_name: str
    profile_picture: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True
