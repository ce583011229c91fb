from pydantic import BaseModel

from unimanage.schemas.user import UserRead


class LoginRequest(BaseModel):
    username: str
    password: str


class SessionRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
