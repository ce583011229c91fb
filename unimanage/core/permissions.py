"""Authorization policy.

Every protected operation has an entry in ``POLICIES``: the roles allowed
to call it and, for resource-scoped operations, an ownership predicate.
Roles are disjoint; admin is never implicitly granted faculty or student
operations.
"""
from dataclasses import dataclass
from typing import Callable

from fastapi import Depends

from unimanage.core.current_user import get_current_user
from unimanage.core.errors import ForbiddenError, UnauthorizedError
from unimanage.models.classroom import Classroom
from unimanage.models.user import User, UserRole
from unimanage.storage import Storage

ADMIN = frozenset({UserRole.ADMIN})
FACULTY = frozenset({UserRole.FACULTY})
STUDENT = frozenset({UserRole.STUDENT})
ANY_ROLE = UserRole.ALL


def manages_classroom(storage: Storage, actor: User, classroom: Classroom) -> bool:
    profile = storage.get_faculty_profile_by_user_id(actor.id)
    return classroom.faculty_id is not None and classroom.faculty_id == profile.id


def enrolled_in_classroom(storage: Storage, actor: User, classroom: Classroom) -> bool:
    profile = storage.get_student_profile_by_user_id(actor.id)
    return storage.check_student_enrollment(profile.id, classroom.id)


def can_view_classroom(storage: Storage, actor: User, classroom: Classroom) -> bool:
    if actor.role == UserRole.ADMIN:
        return True
    if actor.role == UserRole.FACULTY:
        return manages_classroom(storage, actor, classroom)
    return enrolled_in_classroom(storage, actor, classroom)


@dataclass(frozen=True)
class Policy:
    roles: frozenset
    owns: Callable[[Storage, User, object], bool] | None = None
    denied: str = "Forbidden: Insufficient privileges"


_NO_CLASSROOM_ACCESS = "You don't have access to this classroom"

POLICIES: dict[str, Policy] = {
    "profile.view": Policy(ANY_ROLE),
    "department.list": Policy(ANY_ROLE),
    "department.create": Policy(ADMIN),
    "user.list": Policy(ADMIN),
    "faculty.list": Policy(ADMIN),
    "student.list": Policy(ADMIN),
    "classroom.list": Policy(ANY_ROLE),
    "classroom.create": Policy(ADMIN),
    "classroom.view": Policy(ANY_ROLE, can_view_classroom, _NO_CLASSROOM_ACCESS),
    "assignment.list": Policy(ANY_ROLE, can_view_classroom, _NO_CLASSROOM_ACCESS),
    "assignment.create": Policy(
        FACULTY, manages_classroom,
        "You don't have permission to add assignments to this classroom",
    ),
    "material.list": Policy(ANY_ROLE, can_view_classroom, _NO_CLASSROOM_ACCESS),
    "material.create": Policy(
        FACULTY, manages_classroom,
        "You don't have permission to add materials to this classroom",
    ),
    "announcement.list": Policy(ANY_ROLE, can_view_classroom, _NO_CLASSROOM_ACCESS),
    "announcement.create": Policy(
        FACULTY, manages_classroom,
        "You don't have permission to add announcements to this classroom",
    ),
    "submission.create": Policy(STUDENT, enrolled_in_classroom, "Not enrolled in this classroom"),
    "submission.list": Policy(
        FACULTY, manages_classroom, "Only the classroom instructor can view submissions"
    ),
    "submission.grade": Policy(FACULTY, manages_classroom, "Only the classroom instructor can grade"),
    "enrollment.create": Policy(STUDENT),
    "enrollment.list": Policy(STUDENT),
    "achievement.list": Policy(STUDENT),
    "achievement.create": Policy(STUDENT),
    "follow.list": Policy(STUDENT),
    "follow.create": Policy(STUDENT),
    "follow.delete": Policy(STUDENT),
    "analytics.view": Policy(ADMIN),
}


def check_role(actor: User | None, operation: str) -> Policy:
    policy = POLICIES[operation]
    if actor is None:
        raise UnauthorizedError("Unauthorized")
    if actor.role not in policy.roles:
        raise ForbiddenError("Forbidden: Insufficient privileges")
    return policy


def authorize(storage: Storage, actor: User | None, operation: str, resource=None) -> None:
    """Allow or deny ``operation`` for ``actor``, raising on denial.

    The ownership predicate runs only when the policy declares one; such
    operations must be given the resource they act on.
    """
    policy = check_role(actor, operation)
    if policy.owns is None:
        return
    if resource is None:
        raise ValueError(f"{operation} needs a resource for its ownership check")
    if not policy.owns(storage, actor, resource):
        raise ForbiddenError(policy.denied)


def require(operation: str):
    """Dependency enforcing the role half of ``operation``'s policy."""

    def dependency(current_user: User = Depends(get_current_user)) -> User:
        check_role(current_user, operation)
        return current_user

    return dependency

