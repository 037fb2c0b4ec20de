"""
Domain-specific exceptions for registrations app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""

from apps.accounts.services.exceptions import (
    LedgerServiceError,
    NotFoundError,
    InvalidInputError,
    StorageFailureError,
    AccountNotFoundError,
)


class ParticipantNotFoundError(NotFoundError):
    """Raised when a participant does not exist."""
    pass


__all__ = [
    'LedgerServiceError',
    'NotFoundError',
    'InvalidInputError',
    'StorageFailureError',
    'AccountNotFoundError',
    'ParticipantNotFoundError',
]
