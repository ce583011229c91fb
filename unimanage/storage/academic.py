import logging

from sqlalchemy.orm import Session

from unimanage.core.errors import ConflictError, NotFoundError
from unimanage.models.achievement import Achievement
from unimanage.models.announcement import Announcement
from unimanage.models.assignment import Assignment
from unimanage.models.classroom import Classroom
from unimanage.models.enrollment import Enrollment
from unimanage.models.follow import Follow
from unimanage.models.material import Material
from unimanage.models.profile import StudentProfile
from unimanage.models.submission import Submission
from unimanage.models.user import User
from unimanage.storage.profiles import _join_users, apply_points

logger = logging.getLogger(__name__)


def _save(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


class AcademicStore:
    """Classrooms and everything hanging off them, plus the student social graph."""

    # Classrooms

    def create_classroom(self, **fields) -> Classroom:
        with self._session() as db:
            if db.query(Classroom).filter(Classroom.class_id == fields["class_id"]).first():
                raise ConflictError("Class ID already exists")
            return _save(db, Classroom(**fields))

    def get_classroom_by_id(self, classroom_id: int) -> Classroom | None:
        with self._session() as db:
            return db.get(Classroom, classroom_id)

    def get_classroom_by_class_id(self, class_id: str) -> Classroom | None:
        with self._session() as db:
            return db.query(Classroom).filter(Classroom.class_id == class_id).first()

    def get_all_classrooms(self) -> list[Classroom]:
        with self._session() as db:
            return db.query(Classroom).order_by(Classroom.id.asc()).all()

    def get_classrooms_by_faculty_id(self, faculty_id: int) -> list[Classroom]:
        with self._session() as db:
            return (
                db.query(Classroom)
                .filter(Classroom.faculty_id == faculty_id)
                .order_by(Classroom.id.asc())
                .all()
            )

    def get_classrooms_by_student_id(self, student_id: int) -> list[Classroom]:
        with self._session() as db:
            classroom_ids = [
                e.classroom_id
                for e in db.query(Enrollment).filter(Enrollment.student_id == student_id).all()
            ]
            if not classroom_ids:
                return []
            return (
                db.query(Classroom)
                .filter(Classroom.id.in_(classroom_ids))
                .order_by(Classroom.id.asc())
                .all()
            )

    # Enrollments

    def create_enrollment(self, student_id: int, classroom_id: int, grade: str | None = None,
                          progress: int = 0) -> Enrollment:
        """Insert an enrollment row.

        Callers check ``check_student_enrollment`` first (while holding
        ``Storage.lock``); this method does not reject duplicates itself.
        """
        with self._session() as db:
            enrollment = Enrollment(
                student_id=student_id,
                classroom_id=classroom_id,
                grade=grade,
                progress=progress,
            )
            return _save(db, enrollment)

    def get_enrollment_by_id(self, enrollment_id: int) -> Enrollment | None:
        with self._session() as db:
            return db.get(Enrollment, enrollment_id)

    def get_enrollments_by_student_id(self, student_id: int) -> list[Enrollment]:
        with self._session() as db:
            return db.query(Enrollment).filter(Enrollment.student_id == student_id).all()

    def get_enrollments_by_classroom_id(self, classroom_id: int) -> list[Enrollment]:
        with self._session() as db:
            return db.query(Enrollment).filter(Enrollment.classroom_id == classroom_id).all()

    def check_student_enrollment(self, student_id: int, classroom_id: int) -> bool:
        with self._session() as db:
            return (
                db.query(Enrollment)
                .filter(Enrollment.student_id == student_id, Enrollment.classroom_id == classroom_id)
                .first()
                is not None
            )

    # Assignments

    def create_assignment(self, **fields) -> Assignment:
        with self._session() as db:
            return _save(db, Assignment(**fields))

    def get_assignment_by_id(self, assignment_id: int) -> Assignment | None:
        with self._session() as db:
            return db.get(Assignment, assignment_id)

    def get_assignments_by_classroom_id(self, classroom_id: int) -> list[Assignment]:
        with self._session() as db:
            return db.query(Assignment).filter(Assignment.classroom_id == classroom_id).all()

    # Submissions

    def create_submission(self, assignment_id: int, student_id: int, content: str | None = None) -> Submission:
        with self._session() as db:
            submission = Submission(
                assignment_id=assignment_id,
                student_id=student_id,
                content=content,
            )
            return _save(db, submission)

    def get_submission_by_id(self, submission_id: int) -> Submission | None:
        with self._session() as db:
            return db.get(Submission, submission_id)

    def get_submissions_by_assignment_id(self, assignment_id: int) -> list[Submission]:
        with self._session() as db:
            return db.query(Submission).filter(Submission.assignment_id == assignment_id).all()

    def get_submissions_by_student_id(self, student_id: int) -> list[Submission]:
        with self._session() as db:
            return db.query(Submission).filter(Submission.student_id == student_id).all()

    def grade_submission(self, submission_id: int, marks: int, feedback: str | None = None) -> Submission:
        with self._session() as db:
            submission = db.get(Submission, submission_id)
            if submission is None:
                raise NotFoundError("Submission not found")
            submission.marks = marks
            submission.feedback = feedback
            return _save(db, submission)

    # Materials

    def create_material(self, **fields) -> Material:
        with self._session() as db:
            return _save(db, Material(**fields))

    def get_material_by_id(self, material_id: int) -> Material | None:
        with self._session() as db:
            return db.get(Material, material_id)

    def get_materials_by_classroom_id(self, classroom_id: int) -> list[Material]:
        with self._session() as db:
            return db.query(Material).filter(Material.classroom_id == classroom_id).all()

    # Achievements

    def create_achievement(self, student_id: int, title: str, points: int,
                           description: str | None = None) -> Achievement:
        """Record an achievement and credit its points to the student, atomically."""
        with self._session() as db:
            achievement = Achievement(
                student_id=student_id,
                title=title,
                description=description,
                points=points,
            )
            db.add(achievement)
            apply_points(db, student_id, points)
            db.commit()
            db.refresh(achievement)

        logger.info("student %s earned %s points (%s)", student_id, points, title)
        return achievement

    def get_achievement_by_id(self, achievement_id: int) -> Achievement | None:
        with self._session() as db:
            return db.get(Achievement, achievement_id)

    def get_achievements_by_student_id(self, student_id: int) -> list[Achievement]:
        with self._session() as db:
            return db.query(Achievement).filter(Achievement.student_id == student_id).all()

    # Follows

    def create_follow(self, follower_id: int, following_id: int) -> Follow:
        """Insert a follow edge. Callers check ``check_follow`` first."""
        with self._session() as db:
            return _save(db, Follow(follower_id=follower_id, following_id=following_id))

    def get_follow_by_id(self, follow_id: int) -> Follow | None:
        with self._session() as db:
            return db.get(Follow, follow_id)

    def get_following(self, student_id: int) -> list[tuple[StudentProfile, User]]:
        with self._session() as db:
            ids = [f.following_id for f in db.query(Follow).filter(Follow.follower_id == student_id).all()]
            return self._students_with_users(db, ids)

    def get_followers(self, student_id: int) -> list[tuple[StudentProfile, User]]:
        with self._session() as db:
            ids = [f.follower_id for f in db.query(Follow).filter(Follow.following_id == student_id).all()]
            return self._students_with_users(db, ids)

    def check_follow(self, follower_id: int, following_id: int) -> bool:
        with self._session() as db:
            return self._find_follow(db, follower_id, following_id) is not None

    def delete_follow(self, follower_id: int, following_id: int) -> None:
        with self._session() as db:
            follow = self._find_follow(db, follower_id, following_id)
            if follow:
                db.delete(follow)
                db.commit()

    def _find_follow(self, db: Session, follower_id: int, following_id: int) -> Follow | None:
        return (
            db.query(Follow)
            .filter(Follow.follower_id == follower_id, Follow.following_id == following_id)
            .first()
        )

    def _students_with_users(self, db: Session, profile_ids: list[int]) -> list[tuple]:
        if not profile_ids:
            return []
        profiles = (
            db.query(StudentProfile)
            .filter(StudentProfile.id.in_(profile_ids))
            .order_by(StudentProfile.id.asc())
            .all()
        )
        return _join_users(db, profiles, "student")

    # Announcements

    def create_announcement(self, classroom_id: int, title: str, content: str) -> Announcement:
        with self._session() as db:
            return _save(db, Announcement(classroom_id=classroom_id, title=title, content=content))

    def get_announcement_by_id(self, announcement_id: int) -> Announcement | None:
        with self._session() as db:
            return db.get(Announcement, announcement_id)

    def get_announcements_by_classroom_id(self, classroom_id: int) -> list[Announcement]:
        with self._session() as db:
            return db.query(Announcement).filter(Announcement.classroom_id == classroom_id).all()

    # Snapshots for analytics

    def get_all_enrollments(self) -> list[Enrollment]:
        with self._session() as db:
            return db.query(Enrollment).all()

    def get_all_assignments(self) -> list[Assignment]:
        with self._session() as db:
            return db.query(Assignment).all()

    def get_all_submissions(self) -> list[Submission]:
        with self._session() as db:
            return db.query(Submission).all()

    def get_all_materials(self) -> list[Material]:
        with self._session() as db:
            return db.query(Material).all()
