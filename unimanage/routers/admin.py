from fastapi import APIRouter, Depends

from unimanage.core.deps import get_storage
from unimanage.core.permissions import require
from unimanage.models.user import User
from unimanage.schemas.profile import (
    FacultyProfileRead,
    FacultyWithUser,
    StudentProfileRead,
    StudentWithUser,
)
from unimanage.schemas.user import UserRead
from unimanage.storage import Storage

router = APIRouter()


@router.get("/users", response_model=list[UserRead])
def list_users(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("user.list")),
):
    return storage.get_all_users()


@router.get("/faculty", response_model=list[FacultyWithUser])
def list_faculty(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("faculty.list")),
):
    return [
        FacultyWithUser(
            **FacultyProfileRead.model_validate(profile).model_dump(),
            user=UserRead.model_validate(user),
        )
        for profile, user in storage.get_all_faculty()
    ]


@router.get("/students", response_model=list[StudentWithUser])
def list_students(
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("student.list")),
):
    return [
        StudentWithUser(
            **StudentProfileRead.model_validate(profile).model_dump(),
            user=UserRead.model_validate(user),
        )
        for profile, user in storage.get_all_students()
    ]
