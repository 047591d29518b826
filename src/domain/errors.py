"""
Custom application-specific exceptions.
"""
from enum import Enum


class StoreErrorKind(str, Enum):
    QUERY = "QUERY"
    WRITE = "WRITE"
    INVALID_ID = "INVALID_ID"
    INVALID_QUERY = "INVALID_QUERY"
    DUPLICATE_ID = "DUPLICATE_ID"


class BaseAppException(Exception):
    """Base exception for the application."""
    pass


class StoreConnectionError(BaseAppException):
    """Raised when a session with MongoDB cannot be established or kept alive."""
    pass


class StoreError(BaseAppException):
    """Raised for any query, write or command failure once connected."""

    def __init__(self, message: str, kind: StoreErrorKind = StoreErrorKind.QUERY):
        super().__init__(message)
        self.message = message
        self.kind = kind


class InvalidQuizIdError(StoreError):
    """Raised when a quiz id is not a valid ObjectId string."""

    def __init__(self, quiz_id):
        super().__init__(f"Invalid quiz id: {quiz_id!r}", StoreErrorKind.INVALID_ID)
        self.quiz_id = quiz_id


class DuplicateQuizIdError(StoreError):
    """Raised when an insert reuses an existing quiz id."""

    def __init__(self, message: str = "Duplicate quiz id"):
        super().__init__(message, StoreErrorKind.DUPLICATE_ID)


class InvalidSampleSizeError(StoreError):
    """Raised when a random-selection count is neither 'All' nor a positive integer."""

    def __init__(self, count):
        super().__init__(f"Invalid question count: {count!r}", StoreErrorKind.INVALID_QUERY)
        self.count = count


class EmptyUpdateError(StoreError):
    """Raised when an update carries no fields to set."""

    def __init__(self):
        super().__init__("Update must set at least one field", StoreErrorKind.INVALID_QUERY)
