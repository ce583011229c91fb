from fastapi import APIRouter, Depends, status

from unimanage.core.current_user import get_current_user
from unimanage.core.deps import get_storage
from unimanage.core.permissions import authorize, require
from unimanage.models.user import User
from unimanage.routers.classrooms import ensure_classroom_exists
from unimanage.schemas.assignment import AssignmentCreate, AssignmentRead
from unimanage.storage import Storage

router = APIRouter()


@router.get("/classrooms/{classroom_id}/assignments", response_model=list[AssignmentRead])
def list_assignments(
    classroom_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    classroom = ensure_classroom_exists(storage, classroom_id)
    authorize(storage, current_user, "assignment.list", classroom)

    return storage.get_assignments_by_classroom_id(classroom_id)

@router.post(
    "/classrooms/{classroom_id}/assignments",
    response_model=AssignmentRead,
    status_code=status.HTTP_201_CREATED,
)
def create_assignment(
    classroom_id: int,
    payload: AssignmentCreate,
    storage: Storage = Depends(get_storage),
    faculty: User = Depends(require("assignment.create")),
):
    classroom = ensure_classroom_exists(storage, classroom_id)

    # only the faculty member teaching this classroom can add assignments
    authorize(storage, faculty, "assignment.create", classroom)

    return storage.create_assignment(classroom_id=classroom_id, **payload.model_dump())
