from fastapi import APIRouter, Depends, status

from unimanage.core.deps import get_storage
from unimanage.core.errors import ConflictError, NotFoundError
from unimanage.core.permissions import require
from unimanage.models.user import User
from unimanage.schemas.enrollment import EnrollmentCreate, EnrollmentOut
from unimanage.storage import Storage

router = APIRouter()


@router.post("", response_model=EnrollmentOut, status_code=status.HTTP_201_CREATED)
def enroll_me(
    payload: EnrollmentCreate,
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("enrollment.create")),
):
    profile = storage.get_student_profile_by_user_id(me.id)
    classroom = storage.get_classroom_by_class_id(payload.class_id)
    if not classroom:
        raise NotFoundError("Classroom not found")

    # check-then-insert must not interleave with another enrollment request
    with storage.lock:
        if storage.check_student_enrollment(profile.id, classroom.id):
            raise ConflictError("Already enrolled in this class")

        return storage.create_enrollment(student_id=profile.id, classroom_id=classroom.id)


@router.get("/me", response_model=list[EnrollmentOut])
def my_enrollments(
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("enrollment.list")),
):
    profile = storage.get_student_profile_by_user_id(me.id)
    return storage.get_enrollments_by_student_id(profile.id)
