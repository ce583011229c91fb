from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from unimanage.core.authentication import resolve_session
from unimanage.core.deps import get_storage
from unimanage.core.errors import UnauthorizedError
from unimanage.models.user import User
from unimanage.storage import Storage

bearer_scheme = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    return credentials.credentials if credentials else None


def get_current_user(
    request: Request,
    token: str | None = Depends(get_bearer_token),
    storage: Storage = Depends(get_storage),
) -> User:
    user = resolve_session(storage, token) if token else None
    if user is None:
        raise UnauthorizedError("Unauthorized")

    # picked up by LoggingMiddleware
    request.state.user_id = user.id
    return user
