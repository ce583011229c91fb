import secrets
from datetime import datetime, timezone

from unimanage.models.auth_session import AuthSession


def _as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back naive; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionStore:
    """Server-side session records: token -> user id with a fixed expiry."""

    def create_session(self, user_id: int, expires_at: datetime) -> AuthSession:
        with self._session() as db:
            record = AuthSession(
                token=secrets.token_urlsafe(32),
                user_id=user_id,
                expires_at=expires_at,
            )
            db.add(record)
            db.commit()
            db.refresh(record)
            return record

    def get_active_session(self, token: str, now: datetime | None = None) -> AuthSession | None:
        now = now or datetime.now(timezone.utc)
        with self._session() as db:
            record = db.query(AuthSession).filter(AuthSession.token == token).first()
            if record is None:
                return None
            if _as_utc(record.expires_at) <= now:
                db.delete(record)
                db.commit()
                return None
            return record

    def delete_session(self, token: str) -> None:
        with self._session() as db:
            db.query(AuthSession).filter(AuthSession.token == token).delete()
            db.commit()
