from fastapi import APIRouter, Depends, status

from unimanage.core.current_user import get_current_user
from unimanage.core.deps import get_storage
from unimanage.core.errors import NotFoundError
from unimanage.core.permissions import authorize, require
from unimanage.models.classroom import Classroom
from unimanage.models.user import User, UserRole
from unimanage.schemas.classroom import ClassroomCreate, ClassroomRead
from unimanage.storage import Storage

router = APIRouter()


def ensure_classroom_exists(storage: Storage, classroom_id: int) -> Classroom:
    classroom = storage.get_classroom_by_id(classroom_id)
    if not classroom:
        raise NotFoundError("Classroom not found")
    return classroom


@router.get("", response_model=list[ClassroomRead])
def list_classrooms(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require("classroom.list")),
):
    # admins see everything, faculty what they teach, students what they attend
    if current_user.role == UserRole.ADMIN:
        return storage.get_all_classrooms()
    if current_user.role == UserRole.FACULTY:
        profile = storage.get_faculty_profile_by_user_id(current_user.id)
        return storage.get_classrooms_by_faculty_id(profile.id)

    profile = storage.get_student_profile_by_user_id(current_user.id)
    return storage.get_classrooms_by_student_id(profile.id)


@router.post("", response_model=ClassroomRead, status_code=status.HTTP_201_CREATED)
def create_classroom(
    payload: ClassroomCreate,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("classroom.create")),
):
    if payload.faculty_id is not None and storage.get_faculty_profile_by_id(payload.faculty_id) is None:
        raise NotFoundError("Faculty not found")
    if payload.department_id is not None and storage.get_department_by_id(payload.department_id) is None:
        raise NotFoundError("Department not found")

    return storage.create_classroom(**payload.model_dump())


@router.get("/{classroom_id}", response_model=ClassroomRead)
def get_classroom(
    classroom_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    classroom = ensure_classroom_exists(storage, classroom_id)
    authorize(storage, current_user, "classroom.view", classroom)
    return classroom
