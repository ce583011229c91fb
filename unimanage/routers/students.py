from fastapi import APIRouter, Depends, status

from unimanage.core.deps import get_storage
from unimanage.core.errors import ConflictError, InvalidInputError, NotFoundError
from unimanage.core.permissions import require
from unimanage.models.user import User
from unimanage.schemas.achievement import AchievementCreate, AchievementRead
from unimanage.schemas.follow import FollowCreate, FollowRead
from unimanage.schemas.profile import StudentProfileRead, StudentWithUser
from unimanage.schemas.user import UserRead
from unimanage.storage import Storage

router = APIRouter()


def _with_users(rows) -> list[StudentWithUser]:
    return [
        StudentWithUser(
            **StudentProfileRead.model_validate(profile).model_dump(),
            user=UserRead.model_validate(user),
        )
        for profile, user in rows
    ]


# Achievements

@router.get("/achievements", response_model=list[AchievementRead])
def my_achievements(
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("achievement.list")),
):
    profile = storage.get_student_profile_by_user_id(me.id)
    return storage.get_achievements_by_student_id(profile.id)


@router.post("/achievements", response_model=AchievementRead, status_code=status.HTTP_201_CREATED)
def add_achievement(
    payload: AchievementCreate,
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("achievement.create")),
):
    profile = storage.get_student_profile_by_user_id(me.id)

    # points are credited to the profile in the same transaction
    return storage.create_achievement(
        student_id=profile.id,
        title=payload.title,
        description=payload.description,
        points=payload.points,
    )


# Follow graph

@router.get("/following", response_model=list[StudentWithUser])
def my_following(
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("follow.list")),
):
    profile = storage.get_student_profile_by_user_id(me.id)
    return _with_users(storage.get_following(profile.id))


@router.get("/followers", response_model=list[StudentWithUser])
def my_followers(
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("follow.list")),
):
    profile = storage.get_student_profile_by_user_id(me.id)
    return _with_users(storage.get_followers(profile.id))


@router.post("/follow", response_model=FollowRead, status_code=status.HTTP_201_CREATED)
def follow_student(
    payload: FollowCreate,
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("follow.create")),
):
    profile = storage.get_student_profile_by_user_id(me.id)
    if payload.following_id == profile.id:
        raise InvalidInputError("You cannot follow yourself")
    if storage.get_student_profile_by_id(payload.following_id) is None:
        raise NotFoundError("Student not found")

    with storage.lock:
        if storage.check_follow(profile.id, payload.following_id):
            raise ConflictError("Already following this student")

        return storage.create_follow(follower_id=profile.id, following_id=payload.following_id)


@router.delete("/follow/{following_id}")
def unfollow_student(
    following_id: int,
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("follow.delete")),
):
    profile = storage.get_student_profile_by_user_id(me.id)
    storage.delete_follow(profile.id, following_id)
    return {"msg": "Successfully unfollowed"}
