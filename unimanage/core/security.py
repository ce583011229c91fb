from datetime import datetime, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from unimanage.core.config import ALGORITHM, SECRET_KEY

# salted PBKDF2; verify() compares digests in constant time
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_at: datetime) -> str:
    payload = dict(data)
    payload["exp"] = expires_at
    payload["iat"] = datetime.now(timezone.utc)
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
