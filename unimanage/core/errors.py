"""Domain errors raised by the stores, the authentication gate and the policy.

``main.create_app`` registers one handler per class that maps it onto the
matching HTTP status code.
"""


class UniManageError(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(UniManageError):
    status_code = 404


class ConflictError(UniManageError):
    """A uniqueness rule would be broken (duplicate user, enrollment, follow...)."""

    status_code = 409


class InvalidInputError(UniManageError):
    status_code = 400


class UnauthorizedError(UniManageError):
    status_code = 401


class ForbiddenError(UniManageError):
    status_code = 403


class ConsistencyError(UniManageError):
    """An invariant the caller already guaranteed does not hold.

    This is a programmer error, not a user-facing condition: it is never
    caught by the stores and ends the request with a 500.
    """

    status_code = 500
