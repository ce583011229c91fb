import logging

from sqlalchemy.orm import Session

from unimanage.core.errors import ConflictError, ConsistencyError
from unimanage.models.department import Department
from unimanage.models.profile import FacultyProfile, StudentProfile
from unimanage.models.user import User

logger = logging.getLogger(__name__)


def _join_users(db: Session, profiles: list, kind: str) -> list[tuple]:
    user_ids = list({p.user_id for p in profiles})
    users = {u.id: u for u in db.query(User).filter(User.id.in_(user_ids)).all()}

    rows = []
    for p in profiles:
        user = users.get(p.user_id)
        if user is None:
            logger.error("%s profile %s points at missing user %s", kind, p.id, p.user_id)
            raise ConsistencyError(f"User not found for {kind} profile {p.id}")
        rows.append((p, user))
    return rows


def apply_points(db: Session, profile_id: int, delta: int) -> StudentProfile:
    """Adjust a student's balance inside the caller's transaction."""
    profile = db.get(StudentProfile, profile_id)
    if profile is None:
        raise ConsistencyError(f"Student profile not found with id {profile_id}")

    # the balance never drops below zero
    profile.achievement_points = max(0, (profile.achievement_points or 0) + delta)
    return profile


class ProfileStore:
    """Departments plus the role-specific profiles attached 1:1 to users."""

    # Departments

    def create_department(self, name: str, code: str) -> Department:
        with self._session() as db:
            if db.query(Department).filter(Department.name == name).first():
                raise ConflictError("Department name already exists")
            if db.query(Department).filter(Department.code == code).first():
                raise ConflictError("Department code already exists")

            department = Department(name=name, code=code)
            db.add(department)
            db.commit()
            db.refresh(department)
            return department

    def get_department_by_id(self, department_id: int) -> Department | None:
        with self._session() as db:
            return db.get(Department, department_id)

    def get_all_departments(self) -> list[Department]:
        with self._session() as db:
            return db.query(Department).order_by(Department.id.asc()).all()

    # Faculty

    def create_faculty_profile(self, user_id: int, title: str, department_id: int | None = None,
                               bio: str | None = None) -> FacultyProfile:
        with self._session() as db:
            profile = FacultyProfile(user_id=user_id, title=title, department_id=department_id, bio=bio)
            db.add(profile)
            db.commit()
            db.refresh(profile)
            return profile

    def get_faculty_profile_by_id(self, profile_id: int) -> FacultyProfile | None:
        with self._session() as db:
            return db.get(FacultyProfile, profile_id)

    def get_faculty_profile_by_user_id(self, user_id: int) -> FacultyProfile:
        with self._session() as db:
            profile = db.query(FacultyProfile).filter(FacultyProfile.user_id == user_id).first()
        if profile is None:
            logger.error("faculty profile missing for user %s", user_id)
            raise ConsistencyError(f"Faculty profile not found for user {user_id}")
        return profile

    def get_all_faculty(self) -> list[tuple[FacultyProfile, User]]:
        with self._session() as db:
            profiles = db.query(FacultyProfile).order_by(FacultyProfile.id.asc()).all()
            return _join_users(db, profiles, "faculty")

    # Students

    def create_student_profile(self, user_id: int, student_id: str, year: int,
                               department_id: int | None = None, gpa: str = "0.0",
                               achievement_points: int = 0) -> StudentProfile:
        with self._session() as db:
            self._ensure_student_code_free(db, student_id)
            profile = StudentProfile(
                user_id=user_id,
                student_id=student_id,
                year=year,
                department_id=department_id,
                gpa=gpa,
                achievement_points=achievement_points,
            )
            db.add(profile)
            db.commit()
            db.refresh(profile)
            return profile

    def get_student_profile_by_id(self, profile_id: int) -> StudentProfile | None:
        with self._session() as db:
            return db.get(StudentProfile, profile_id)

    def get_student_profile_by_student_code(self, student_id: str) -> StudentProfile | None:
        with self._session() as db:
            return db.query(StudentProfile).filter(StudentProfile.student_id == student_id).first()

    def get_student_profile_by_user_id(self, user_id: int) -> StudentProfile:
        with self._session() as db:
            profile = db.query(StudentProfile).filter(StudentProfile.user_id == user_id).first()
        if profile is None:
            logger.error("student profile missing for user %s", user_id)
            raise ConsistencyError(f"Student profile not found for user {user_id}")
        return profile

    def get_all_students(self) -> list[tuple[StudentProfile, User]]:
        with self._session() as db:
            profiles = db.query(StudentProfile).order_by(StudentProfile.id.asc()).all()
            return _join_users(db, profiles, "student")

    def update_student_points(self, profile_id: int, delta: int) -> StudentProfile:
        with self._session() as db:
            profile = apply_points(db, profile_id, delta)
            db.commit()
            db.refresh(profile)
            return profile

    def _ensure_student_code_free(self, db: Session, student_id: str) -> None:
        if db.query(StudentProfile).filter(StudentProfile.student_id == student_id).first():
            raise ConflictError("Student ID already exists")
