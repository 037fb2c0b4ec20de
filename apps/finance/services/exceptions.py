"""
Domain-specific exceptions for finance app.

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


class PaymentNotFoundError(NotFoundError):
    """Raised when a payment does not exist."""
    pass


class ReceiptScanError(LedgerServiceError):
    """Raised when a receipt image cannot be read by the extraction service."""
    pass


class ReceiptScannerNotConfiguredError(ReceiptScanError):
    """Raised when no API key is configured for receipt scanning."""
    pass


__all__ = [
    'LedgerServiceError',
    'NotFoundError',
    'InvalidInputError',
    'StorageFailureError',
    'AccountNotFoundError',
    'PaymentNotFoundError',
    'ReceiptScanError',
    'ReceiptScannerNotConfiguredError',
]
