import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from unimanage.core.errors import ConflictError
from unimanage.models.profile import FacultyProfile, StudentProfile
from unimanage.models.user import User, UserRole

logger = logging.getLogger(__name__)


def _username_filter(username: str):
    return func.lower(User.username) == username.lower()


def _email_filter(email: str):
    return func.lower(User.email) == email.lower()


class IdentityStore:
    """Users, with case-insensitive username/email uniqueness."""

    def get_user(self, user_id: int) -> User | None:
        with self._session() as db:
            return db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._session() as db:
            return db.query(User).filter(_username_filter(username)).first()

    def get_user_by_email(self, email: str) -> User | None:
        with self._session() as db:
            return db.query(User).filter(_email_filter(email)).first()

    def get_all_users(self) -> list[User]:
        with self._session() as db:
            return db.query(User).order_by(User.id.asc()).all()

    def create_user(self, **fields) -> User:
        with self._session() as db:
            user = self._add_user(db, fields)
            db.commit()
            db.refresh(user)
            return user

    def create_user_with_profile(self, user_fields: dict, profile_fields: dict | None = None) -> User:
        """Create a user together with the profile its role requires.

        Faculty users get a FacultyProfile, students a StudentProfile and
        admins none. Both rows are written in one transaction, so a user
        never exists without its profile.
        """
        profile_fields = profile_fields or {}

        with self._session() as db:
            user = self._add_user(db, user_fields)
            db.flush()

            if user.role == UserRole.FACULTY:
                db.add(FacultyProfile(user_id=user.id, **profile_fields))
            elif user.role == UserRole.STUDENT:
                self._ensure_student_code_free(db, profile_fields["student_id"])
                db.add(StudentProfile(user_id=user.id, **profile_fields))

            db.commit()
            db.refresh(user)

        logger.info("created %s user id=%s", user.role, user.id)
        return user

    def _add_user(self, db: Session, fields: dict) -> User:
        existing = (
            db.query(User)
            .filter(or_(_username_filter(fields["username"]), _email_filter(fields["email"])))
            .first()
        )
        if existing:
            if existing.username.lower() == fields["username"].lower():
                raise ConflictError("Username already exists")
            raise ConflictError("Email already exists")

        user = User(**fields)
        db.add(user)
        return user
