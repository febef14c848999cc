"""Domain exceptions raised by services and rendered as problem details"""

from typing import Optional

from fastapi import status


class NovaServiceError(Exception):
    """Base exception for service errors"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    title: str = "Internal Server Error"
    error_type: Optional[str] = None

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationFailedError(NovaServiceError):
    """Input rejected before any write"""

    status_code = status.HTTP_400_BAD_REQUEST
    title = "Validation Error"


class PermissionDeniedError(NovaServiceError):
    """Caller's role or membership does not allow the operation"""

    status_code = status.HTTP_403_FORBIDDEN
    title = "Forbidden"


class NotFoundError(NovaServiceError):
    """Resource missing or not visible to the caller"""

    status_code = status.HTTP_404_NOT_FOUND
    title = "Not Found"


class ConflictError(NovaServiceError):
    """Unique constraint violated"""

    status_code = status.HTTP_409_CONFLICT
    title = "Conflict"
