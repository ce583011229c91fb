"""Authentication gate: credentials in, actor out.

Registration, login and logout live here so the routers stay thin and
the rules can be exercised without HTTP.
"""
import logging
import random
from datetime import datetime, timezone

from unimanage.core.config import (
    DEFAULT_FACULTY_TITLE,
    DEFAULT_STUDENT_YEAR,
    SESSION_EXPIRE,
    STUDENT_EMAIL_MARKER,
)
from unimanage.core.errors import ConflictError, InvalidInputError, NotFoundError
from unimanage.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    pwd_context,
    verify_password,
)
from unimanage.models.user import User, UserRole
from unimanage.schemas.user import RegisterRequest
from unimanage.storage import Storage

logger = logging.getLogger(__name__)


def authenticate(storage: Storage, username: str, password: str) -> User | None:
    user = storage.get_user_by_username(username)
    if user is None:
        # a miss costs one hash too, like a wrong password
        pwd_context.dummy_verify()
    if user is None or not verify_password(password, user.password):
        logger.warning("failed login for username=%r", username)
        return None
    return user


def _generate_student_code(storage: Storage) -> str:
    while True:
        code = f"S{random.randint(10000, 99999)}"
        if storage.get_student_profile_by_student_code(code) is None:
            return code


def register_user(storage: Storage, payload: RegisterRequest) -> User:
    if payload.role == UserRole.STUDENT and STUDENT_EMAIL_MARKER not in payload.email:
        raise InvalidInputError("Student accounts require a valid .edu email address")

    if payload.department_id is not None and storage.get_department_by_id(payload.department_id) is None:
        raise NotFoundError("Department not found")

    user_fields = {
        "username": payload.username,
        "email": payload.email,
        "password": hash_password(payload.password),
        "role": payload.role,
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "profile_picture": payload.profile_picture,
    }

    with storage.lock:
        if storage.get_user_by_username(payload.username):
            raise ConflictError("Username already exists")
        if storage.get_user_by_email(payload.email):
            raise ConflictError("Email already exists")

        if payload.role == UserRole.FACULTY:
            profile_fields = {
                "title": payload.title or DEFAULT_FACULTY_TITLE,
                "department_id": payload.department_id,
                "bio": payload.bio,
            }
        elif payload.role == UserRole.STUDENT:
            profile_fields = {
                "student_id": payload.student_id or _generate_student_code(storage),
                "year": payload.year or DEFAULT_STUDENT_YEAR,
                "department_id": payload.department_id,
            }
        else:
            profile_fields = None

        user = storage.create_user_with_profile(user_fields, profile_fields)

    logger.info("registered %s %r", user.role, user.username)
    return user


def start_session(storage: Storage, user: User) -> str:
    expires_at = datetime.now(timezone.utc) + SESSION_EXPIRE
    record = storage.create_session(user.id, expires_at)
    return create_access_token(
        data={"sub": str(user.id), "sid": record.token},
        expires_at=expires_at,
    )


def resolve_session(storage: Storage, token: str) -> User | None:
    payload = decode_access_token(token)
    if not payload or "sid" not in payload:
        return None

    record = storage.get_active_session(payload["sid"])
    if record is None or str(record.user_id) != payload.get("sub"):
        return None

    # the bound user may have disappeared since login
    return storage.get_user(record.user_id)


def end_session(storage: Storage, token: str | None) -> None:
    if not token:
        return
    payload = decode_access_token(token)
    if payload and "sid" in payload:
        storage.delete_session(payload["sid"])
        logger.info("user %s logged out", payload.get("sub"))
