"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and translate them into
status codes or user-friendly messages.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level violation, reported alongside a ValidationError."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``details`` is populated when several fields were checked at once
    (e.g. the order entity's own invariant check) and is empty when the
    message alone identifies the cause.
    """

    def __init__(self, message: str, details: list[FieldError] | None = None) -> None:
        super().__init__(message)
        self.details = list(details or [])


class UploadRejectedError(ValidationError):
    """An uploaded file is too large or not an allowed image type."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The document store is unavailable or refused a write."""


class OrderNumberConflict(PersistenceError):
    """Another order already holds the generated order number."""


class AuthorizationError(DomainException):
    """The caller did not present the admin shared secret."""


class NotificationChannelFailure(DomainException):
    """An email or SMS could not be delivered.

    Raised by channel implementations.  Order notifications turn it into
    an outcome value; only the diagnostic test email reports it as an error.
    """
