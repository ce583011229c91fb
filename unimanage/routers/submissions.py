import logging

from fastapi import APIRouter, Depends, status

from unimanage.core.deps import get_storage
from unimanage.core.errors import InvalidInputError, NotFoundError
from unimanage.core.permissions import authorize, require
from unimanage.models.assignment import Assignment
from unimanage.models.classroom import Classroom
from unimanage.models.user import User
from unimanage.schemas.submission import SubmissionCreate, SubmissionGradeUpdate, SubmissionRead
from unimanage.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


def _ensure_assignment_exists(storage: Storage, assignment_id: int) -> Assignment:
    a = storage.get_assignment_by_id(assignment_id)
    if not a:
        raise NotFoundError("Assignment not found")
    return a


def _classroom_of(storage: Storage, assignment: Assignment) -> Classroom:
    classroom = storage.get_classroom_by_id(assignment.classroom_id)
    if not classroom:
        raise NotFoundError("Classroom not found")
    return classroom


@router.post(
    "/assignments/{assignment_id}/submissions",
    response_model=SubmissionRead,
    status_code=status.HTTP_201_CREATED,
)
def submit_assignment(
    assignment_id: int,
    payload: SubmissionCreate,
    storage: Storage = Depends(get_storage),
    me: User = Depends(require("submission.create")),
):
    assignment = _ensure_assignment_exists(storage, assignment_id)
    authorize(storage, me, "submission.create", _classroom_of(storage, assignment))

    profile = storage.get_student_profile_by_user_id(me.id)

    # every hand-in is kept; a resubmission is a new row
    return storage.create_submission(
        assignment_id=assignment_id,
        student_id=profile.id,
        content=payload.content,
    )


@router.get(
    "/assignments/{assignment_id}/submissions",
    response_model=list[SubmissionRead],
)
def list_submissions_for_assignment(
    assignment_id: int,
    storage: Storage = Depends(get_storage),
    faculty: User = Depends(require("submission.list")),
):
    assignment = _ensure_assignment_exists(storage, assignment_id)
    authorize(storage, faculty, "submission.list", _classroom_of(storage, assignment))

    return storage.get_submissions_by_assignment_id(assignment_id)


@router.patch(
    "/submissions/{submission_id}/grade",
    response_model=SubmissionRead,
)
def grade_submission(
    submission_id: int,
    payload: SubmissionGradeUpdate,
    storage: Storage = Depends(get_storage),
    faculty: User = Depends(require("submission.grade")),
):
    sub = storage.get_submission_by_id(submission_id)
    if not sub:
        raise NotFoundError("Submission not found")

    assignment = _ensure_assignment_exists(storage, sub.assignment_id)
    authorize(storage, faculty, "submission.grade", _classroom_of(storage, assignment))

    if assignment.total_marks is not None and payload.marks > assignment.total_marks:
        raise InvalidInputError(f"marks must be between 0 and {assignment.total_marks}")

    graded = storage.grade_submission(submission_id, payload.marks, payload.feedback)
    logger.info("submission %s graded %s by user %s", submission_id, payload.marks, faculty.id)
    return graded
