# backend/careersync/core/exceptions.py
"""
Domain-specific exceptions for the booking core.

Services raise these; the API layer converts them with ``to_http_exception``
so each error class owns its HTTP status.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import OperationalError

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation of caller input fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when the request collides with current state."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class ForbiddenException(DomainException):
    """Raised when the caller does not own the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails for infrastructure reasons."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific business exceptions


class TimeslotUnavailableException(ConflictException):
    """Raised when a timeslot is already taken or no longer exists."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or "Timeslot unavailable",
            code="TIMESLOT_UNAVAILABLE",
            details=details or {},
        )


class PreconditionFailedException(BusinessRuleException):
    """Raised when a mentor profile lacks data an operation depends on."""

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code="PRECONDITION_FAILED", details=details or {})


class DatabaseBusyException(ServiceException):
    """
    Raised when the database refused a lock for long enough that the request
    gave up. Clients should retry, so it maps to 503 with Retry-After.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message or "Service temporarily busy. Please retry.",
            code="DATABASE_BUSY",
            details=details or {},
        )

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={"message": self.message, "code": self.code, "details": self.details},
            headers={"Retry-After": "2"},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    The originating SQLAlchemy error is chained as ``__cause__`` so callers
    can tell integrity violations and lock contention apart from other
    failures.
    """


# PostgreSQL: deadlock_detected, lock_not_available, serialization_failure
_LOCK_CONTENTION_SQLSTATES = {"40P01", "55P03", "40001"}
_LOCK_CONTENTION_SNIPPETS = (
    "database is locked",
    "deadlock detected",
    "could not obtain lock",
    "could not serialize access",
)


def is_db_lock_contention(exc: Optional[BaseException]) -> bool:
    """
    Check if a database error means a lock could not be obtained.

    RepositoryException and ServiceException are unwrapped to the
    SQLAlchemy error chained as their cause.
    """
    if isinstance(exc, (RepositoryException, ServiceException)):
        exc = exc.__cause__
    if not isinstance(exc, OperationalError):
        return False
    orig = getattr(exc, "orig", None)
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if pgcode in _LOCK_CONTENTION_SQLSTATES:
        return True
    message = str(exc).lower()
    return any(snippet in message for snippet in _LOCK_CONTENTION_SNIPPETS)
