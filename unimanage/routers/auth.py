from fastapi import APIRouter, Depends, status

from unimanage.core.authentication import authenticate, end_session, register_user, start_session
from unimanage.core.current_user import get_bearer_token, get_current_user
from unimanage.core.deps import get_storage
from unimanage.core.errors import UnauthorizedError
from unimanage.core.permissions import require
from unimanage.models.user import User, UserRole
from unimanage.schemas.auth import LoginRequest, SessionRead
from unimanage.schemas.profile import FacultyProfileRead, StudentProfileRead
from unimanage.schemas.user import RegisterRequest, UserRead
from unimanage.storage import Storage

router = APIRouter()


@router.post(
    "/register",
    response_model=SessionRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Student accounts require a valid .edu email address"},
        409: {"description": "Username or email already exists"},
    },
)
def register(payload: RegisterRequest, storage: Storage = Depends(get_storage)):
    user = register_user(storage, payload)

    # registering logs the new user straight in
    return {"access_token": start_session(storage, user), "user": user}


@router.post(
    "/login",
    response_model=SessionRead,
    responses={
        401: {"description": "Invalid username or password"},
    },
)
def login(payload: LoginRequest, storage: Storage = Depends(get_storage)):
    user = authenticate(storage, payload.username, payload.password)
    if not user:
        raise UnauthorizedError("Invalid username or password")

    return {"access_token": start_session(storage, user), "user": user}


@router.post("/logout")
def logout(
    token: str | None = Depends(get_bearer_token),
    storage: Storage = Depends(get_storage),
):
    end_session(storage, token)
    return {"msg": "logged out"}


@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("/me/profile", response_model=FacultyProfileRead | StudentProfileRead | None)
def my_profile(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require("profile.view")),
):
    if current_user.role == UserRole.FACULTY:
        return storage.get_faculty_profile_by_user_id(current_user.id)
    if current_user.role == UserRole.STUDENT:
        return storage.get_student_profile_by_user_id(current_user.id)
    return None
