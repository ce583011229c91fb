from fastapi import APIRouter, Depends, status

from unimanage.core.current_user import get_current_user
from unimanage.core.deps import get_storage
from unimanage.core.permissions import authorize, require
from unimanage.models.user import User
from unimanage.routers.classrooms import ensure_classroom_exists
from unimanage.schemas.material import MaterialCreate, MaterialRead
from unimanage.storage import Storage

router = APIRouter()


@router.get("/classrooms/{classroom_id}/materials", response_model=list[MaterialRead])
def list_materials(
    classroom_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    classroom = ensure_classroom_exists(storage, classroom_id)
    authorize(storage, current_user, "material.list", classroom)
    return storage.get_materials_by_classroom_id(classroom_id)


@router.post(
    "/classrooms/{classroom_id}/materials",
    response_model=MaterialRead,
    status_code=status.HTTP_201_CREATED,
)
def create_material(
    classroom_id: int,
    payload: MaterialCreate,
    storage: Storage = Depends(get_storage),
    faculty: User = Depends(require("material.create")),
):
    classroom = ensure_classroom_exists(storage, classroom_id)
    authorize(storage, faculty, "material.create", classroom)
    return storage.create_material(classroom_id=classroom_id, **payload.model_dump())
