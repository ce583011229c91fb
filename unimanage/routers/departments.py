from fastapi import APIRouter, Depends, status

from unimanage.core.deps import get_storage
from unimanage.core.permissions import require
from unimanage.models.user import User
from unimanage.schemas.department import DepartmentCreate, DepartmentRead
from unimanage.storage import Storage

router = APIRouter()


@router.get("", response_model=list[DepartmentRead])
def list_departments(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require("department.list")),
):
    return storage.get_all_departments()


@router.post("", response_model=DepartmentRead, status_code=status.HTTP_201_CREATED)
def create_department(
    payload: DepartmentCreate,
    storage: Storage = Depends(get_storage),
    admin: User = Depends(require("department.create")),
):
    return storage.create_department(name=payload.name, code=payload.code)
