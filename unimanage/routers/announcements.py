from fastapi import APIRouter, Depends, status

from unimanage.core.current_user import get_current_user
from unimanage.core.deps import get_storage
from unimanage.core.permissions import authorize, require
from unimanage.models.user import User
from unimanage.routers.classrooms import ensure_classroom_exists
from unimanage.schemas.announcement import AnnouncementCreate, AnnouncementRead
from unimanage.storage import Storage

router = APIRouter()


@router.get("/classrooms/{classroom_id}/announcements", response_model=list[AnnouncementRead])
def list_announcements(
    classroom_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    classroom = ensure_classroom_exists(storage, classroom_id)
    authorize(storage, current_user, "announcement.list", classroom)
    return storage.get_announcements_by_classroom_id(classroom_id)


@router.post(
    "/classrooms/{classroom_id}/announcements",
    response_model=AnnouncementRead,
    status_code=status.HTTP_201_CREATED,
)
def create_announcement(
    classroom_id: int,
    payload: AnnouncementCreate,
    storage: Storage = Depends(get_storage),
    faculty: User = Depends(require("announcement.create")),
):
    classroom = ensure_classroom_exists(storage, classroom_id)
    authorize(storage, faculty, "announcement.create", classroom)
    return storage.create_announcement(
        classroom_id=classroom_id,
        title=payload.title,
        content=payload.content,
    )
