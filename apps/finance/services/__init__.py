"""
Finance app services layer.

Services contain business logic and orchestrate operations across models.
All ledger-mutating operations use transactions and per-family row locks.
"""

from .exceptions import (
    LedgerServiceError,
    NotFoundError,
    InvalidInputError,
    StorageFailureError,
    AccountNotFoundError,
    PaymentNotFoundError,
    ReceiptScanError,
    ReceiptScannerNotConfiguredError,
)

from .ledger_reconciliation import (
    LedgerSnapshot,
    record_payment,
    reject_payment,
    delete_payment,
    rebuild_ledger,
    get_ledger,
    list_payments,
    get_payment,
)

from .notifications import (
    unseen_payments,
    mark_payment_seen,
    mark_all_payments_seen,
)

from .event_statistics import EventStatistics
from .receipt_scanning import ReceiptScanner, ScannedReceipt


__all__ = [
    # Exceptions
    'LedgerServiceError',
    'NotFoundError',
    'InvalidInputError',
    'StorageFailureError',
    'AccountNotFoundError',
    'PaymentNotFoundError',
    'ReceiptScanError',
    'ReceiptScannerNotConfiguredError',

    # Ledger Reconciliation
    'LedgerSnapshot',
    'record_payment',
    'reject_payment',
    'delete_payment',
    'rebuild_ledger',
    'get_ledger',
    'list_payments',
    'get_payment',

    # Notifications
    'unseen_payments',
    'mark_payment_seen',
    'mark_all_payments_seen',

    # Statistics and scanning
    'EventStatistics',
    'ReceiptScanner',
    'ScannedReceipt',
]
