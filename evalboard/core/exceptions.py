"""Custom exceptions for the application."""

from typing import Optional

from fastapi import HTTPException, status

from evalboard.utils.messages import get_message


class AuthenticationError(HTTPException):
    """Missing, invalid or expired credentials."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message or get_message("auth", "invalid_token"),
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    """Valid identity without the role the resource requires."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=message or get_message("access", "forbidden"),
        )


class ValidationError(HTTPException):
    """Malformed form or profile input; nothing is written."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=message,
        )


class NotFoundError(HTTPException):
    """Row missing, or outside the caller's data scope."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message or get_message("crud", "not_found"),
        )


class ConflictError(HTTPException):
    """Unique value already taken."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=message or get_message("crud", "already_exists"),
        )


class BackendUnavailable(HTTPException):
    """Store failure after retries, or a store call that timed out."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=message or get_message("store", "unavailable"),
        )


class AggregationDataError(ValueError):
    """Score payload that is structurally malformed (not merely empty)."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or get_message("evaluation", "malformed_scores"))
