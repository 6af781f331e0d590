"""Custom exception hierarchy for talkbuddy application."""

from fastapi import HTTPException
from starlette import status


class TalkbuddyError(Exception):
    """Base exception for all talkbuddy errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(TalkbuddyError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: int | None = None) -> None:
        self.user_id = user_id
        if user_id is not None:
            super().__init__(f"User with id {user_id} not found")
        else:
            super().__init__("User not found")


class ProblemNotFoundError(NotFoundError):
    """Problem not found, or owned by a different user."""

    def __init__(self, problem_id: str | None = None) -> None:
        self.problem_id = problem_id
        if problem_id is not None:
            super().__init__(f"Problem with id {problem_id} not found")
        else:
            super().__init__("Problem not found")


class ValidationError(TalkbuddyError):
    """Validation error."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=400)


class UpstreamServiceError(TalkbuddyError):
    """The inference service returned an error or could not be reached."""

    def __init__(
        self, message: str, *, operation: str, upstream_status: int | None = None
    ) -> None:
        """Initialize with the upstream message and the operation that failed."""
        self.operation = operation
        self.upstream_status = upstream_status
        super().__init__(message, status_code=502)


class ProblemIdConflictError(UpstreamServiceError):
    """The inference service returned a problem id already owned by another user."""

    def __init__(self, problem_id: str) -> None:
        self.problem_id = problem_id
        super().__init__(
            f"Inference service returned problem id {problem_id} which belongs to another user",
            operation="generate_problem",
        )


class StorageError(TalkbuddyError):
    """Persistence layer failure."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
