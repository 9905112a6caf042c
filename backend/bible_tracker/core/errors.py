"""
HTTP error taxonomy.

Handlers raise these at their own boundary. Messages of 4xx errors are
returned to the client as-is; UnexpectedError always carries a generic
message and the real cause is only logged.
"""

from fastapi import HTTPException, status


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Invalid request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class NotFoundOrForbidden(HTTPException):
    """Resource is absent or belongs to someone else; callers can't tell which."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Conflict") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnexpectedError(HTTPException):
    def __init__(self, detail: str = "An error occurred") -> None:
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
