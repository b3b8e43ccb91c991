"""Exceptions raised by the service layer.

Services never build HTTP responses themselves. Each exception carries the
status code the API layer should answer with, and the exception handler
registered in :mod:`noddit.main` renders ``{"detail": ...}`` from it.
"""

from __future__ import annotations

from fastapi import status


class ServiceError(RuntimeError):
    """Base class for all service-level failures."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ServiceError):
    """Raised when a referenced user, post or subnoddit does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthorizedError(ServiceError):
    """Raised when a user tries to mutate content they do not own."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ConflictError(ServiceError):
    """Raised when a write would violate a uniqueness rule."""

    status_code = status.HTTP_409_CONFLICT


class InternalServerError(ServiceError):
    """Raised for invalid filter combinations and data-consistency anomalies."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
