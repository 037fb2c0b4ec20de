"""
Error kinds shared by every ledger-related service.

Each app's ``services/exceptions.py`` subclasses these so views can catch
by kind (not found, invalid input, storage failure) regardless of the app
that raised it.
"""


class LedgerServiceError(Exception):
    """Base exception for registration and finance services."""
    pass


class NotFoundError(LedgerServiceError):
    """Raised when a referenced account, participant or payment does not exist."""
    pass


class InvalidInputError(LedgerServiceError):
    """Raised when an operation receives a value outside its domain."""
    pass


class StorageFailureError(LedgerServiceError):
    """Raised when the database fails in the middle of an operation."""
    pass


class AccountNotFoundError(NotFoundError):
    """Raised when an account does not exist."""
    pass
