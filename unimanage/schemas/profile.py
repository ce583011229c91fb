from datetime import datetime

from pydantic import BaseModel

from unimanage.schemas.user import UserRead


class FacultyProfileRead(BaseModel):
    id: int
    user_id: int
    department_id: int | None = None
    title: str
    bio: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class StudentProfileRead(BaseModel):
    id: int
    user_id: int
    student_id: str
    year: int
    achievement_points: int
    gpa: str
    department_id: int | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class FacultyWithUser(FacultyProfileRead):
    user: UserRead


class StudentWithUser(StudentProfileRead):
    user: UserRead
