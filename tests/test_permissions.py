import pytest

from unimanage.core.errors import ForbiddenError, UnauthorizedError
from unimanage.core.permissions import POLICIES, authorize, check_role
from unimanage.models.user import UserRole


def test_every_policy_names_known_roles():
    for operation, policy in POLICIES.items():
        assert policy.roles, operation
        assert policy.roles <= UserRole.ALL, operation


def test_missing_actor_is_unauthorized(seed, storage):
    with pytest.raises(UnauthorizedError):
        check_role(None, "classroom.list")
    with pytest.raises(UnauthorizedError):
        authorize(storage, None, "assignment.create", seed.owned)


def test_roles_are_disjoint(seed, storage):
    # admin is not a super-student
    with pytest.raises(ForbiddenError):
        authorize(storage, seed.admin, "achievement.create")
    with pytest.raises(ForbiddenError):
        authorize(storage, seed.admin, "assignment.create", seed.owned)
    with pytest.raises(ForbiddenError):
        authorize(storage, seed.faculty, "analytics.view")
    with pytest.raises(ForbiddenError):
        authorize(storage, seed.student, "classroom.create")


def test_faculty_must_own_the_classroom(seed, storage):
    authorize(storage, seed.faculty, "assignment.create", seed.owned)

    with pytest.raises(ForbiddenError, match="permission to add assignments"):
        authorize(storage, seed.other_faculty, "assignment.create", seed.owned)

    # a classroom without an instructor belongs to nobody
    with pytest.raises(ForbiddenError):
        authorize(storage, seed.faculty, "assignment.create", seed.unowned)


def test_classroom_visibility(seed, storage):
    authorize(storage, seed.admin, "classroom.view", seed.unowned)
    authorize(storage, seed.faculty, "classroom.view", seed.owned)
    authorize(storage, seed.student, "classroom.view", seed.owned)

    with pytest.raises(ForbiddenError):
        authorize(storage, seed.student, "classroom.view", seed.unowned)
    with pytest.raises(ForbiddenError):
        authorize(storage, seed.other_student, "material.list", seed.owned)
    with pytest.raises(ForbiddenError):
        authorize(storage, seed.other_faculty, "announcement.list", seed.owned)


def test_ownership_policy_needs_a_resource(seed, storage):
    with pytest.raises(ValueError):
        authorize(storage, seed.faculty, "assignment.create")


def test_unknown_operation_is_a_programming_error(seed):
    with pytest.raises(KeyError):
        check_role(seed.admin, "classroom.delete")
