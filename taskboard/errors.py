"""Domain error taxonomy shared by services and the HTTP boundary.

Every error carries an :class:`ErrorKind` and the HTTP status it maps to, so
the boundary can surface it verbatim without inspecting the message.
"""
from enum import Enum


class ErrorKind(str, Enum):
    validation = "validation"
    not_found = "not_found"
    access_denied = "access_denied"
    unauthenticated = "unauthenticated"
    conflict = "conflict"
    internal = "internal"


class TaskBoardError(Exception):
    kind: ErrorKind = ErrorKind.internal
    status_code: int = 500
    default_message = "Server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def __repr__(self):
        return f"<{type(self).__name__} kind={self.kind.value} message={self.message!r}>"


class ValidationError(TaskBoardError):
    """Malformed or missing input; the client must fix it and retry."""
    kind = ErrorKind.validation
    status_code = 400
    default_message = "Invalid input"


class NotFound(TaskBoardError):
    kind = ErrorKind.not_found
    status_code = 404
    default_message = "Not found"


class AccessDenied(TaskBoardError):
    kind = ErrorKind.access_denied
    status_code = 403
    default_message = "Access denied. You are not a member of this board."


class Unauthenticated(TaskBoardError):
    kind = ErrorKind.unauthenticated
    status_code = 401
    default_message = "Could not validate credentials"


class Conflict(TaskBoardError):
    # Reserved for optimistic concurrency checks; nothing raises it yet.
    kind = ErrorKind.conflict
    status_code = 409
    default_message = "Conflict"


class InternalError(TaskBoardError):
    """Store or transaction failure. Nothing was committed; safe to retry."""
    kind = ErrorKind.internal
    status_code = 500
    default_message = "Server error"


class DeadlineExceeded(InternalError):
    status_code = 504
    default_message = "Operation timed out"
