"""
Ledger Reconciliation Service
=============================

Keeps each family's ledger (``total``, ``paid``, ``balance``, ``status``)
in step with its participants and payments.

Every mutating operation runs in a single transaction that first locks
the family's ledger row with ``SELECT ... FOR UPDATE``. Writers touching
the same family are serialized; different families never block each other.
A failure anywhere inside the block rolls back the ledger together with
the participant or payment change.

Status rules::

    balance <= 0            -> settled
    paid > 0                -> partial
    otherwise               -> pending

Example:
    Recording and rejecting an installment::

        from apps.finance.services import record_payment, reject_payment

        payment = record_payment(
            account_id=family.id,
            amount=Decimal('100.00'),
            date=date(2026, 1, 16),
        )
        reject_payment(payment_id=payment.id)  # ledger back where it was

Note:
    ``rebuild_ledger`` recomputes the figures from scratch without writing
    them. It exists for consistency checks, never for the live path.
"""

import logging
from contextlib import contextmanager
from datetime import date as date_type
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Optional

from django.db import DatabaseError, transaction
from django.db.models import Sum

from apps.finance.models import (
    Ledger,
    LedgerStatus,
    Payment,
    PaymentSource,
    PaymentStatus,
    ledger_status,
)

from .exceptions import (
    AccountNotFoundError,
    InvalidInputError,
    PaymentNotFoundError,
    StorageFailureError,
)

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')
CENT = Decimal('0.01')


class LedgerSnapshot(NamedTuple):
    total: Decimal
    paid: Decimal
    balance: Decimal
    status: str


@contextmanager
def ledger_transaction():
    """
    Atomic block for ledger mutations.

    Database errors raised inside the block are rolled back and surfaced
    as ``StorageFailureError``; they are never retried.
    """
    try:
        with transaction.atomic():
            yield
    except DatabaseError as e:
        logger.exception("Ledger operation failed in storage")
        raise StorageFailureError(f"Storage failure: {e}") from e


def lock_ledger(account_id) -> Ledger:
    """
    Lock and return the ledger of ``account_id``.

    Must be called inside ``ledger_transaction()``.

    Raises:
        AccountNotFoundError: If the account doesn't exist or has no ledger
    """
    try:
        return (
            Ledger.objects
            .select_for_update()
            .select_related('account')
            .get(account_id=account_id)
        )
    except (Ledger.DoesNotExist, ValueError, TypeError):
        raise AccountNotFoundError(f"Account with ID {account_id} not found")


def apply_total_change(ledger: Ledger, delta: Decimal) -> Ledger:
    """Add ``delta`` to the owed total of a locked ledger and refresh it."""
    ledger.total += delta
    ledger.refresh_figures()
    return ledger


def to_amount(value) -> Decimal:
    """
    Coerce ``value`` to a two-decimal currency amount.

    Raises:
        InvalidInputError: If the value is not a finite, non-zero number
            with at most two decimal places
    """
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(f"Invalid amount: {value!r}")

    if not amount.is_finite():
        raise InvalidInputError(f"Invalid amount: {value!r}")
    if amount != amount.quantize(CENT):
        raise InvalidInputError("Amount must have at most two decimal places")
    if amount == 0:
        raise InvalidInputError("Amount must not be zero")

    return amount.quantize(CENT)


def _reverse_payment(ledger: Ledger, payment: Payment) -> None:
    """Take a payment's amount back out of ``paid``, floored at zero."""
    remaining = ledger.paid - payment.amount
    if remaining < 0:
        logger.warning(
            "Paid amount for account %s would go negative (%s - %s); clamping to 0",
            ledger.account_id, ledger.paid, payment.amount,
        )
        remaining = ZERO
    ledger.paid = remaining
    ledger.refresh_figures()


def record_payment(
    *,
    account_id,
    amount,
    date: date_type,
    receipt: Optional[bytes] = None,
    receipt_content_type: str = '',
    receipt_filename: str = '',
    source: str = PaymentSource.MANUAL,
    note: str = '',
) -> Payment:
    """
    Append a validated payment and add it to the family's paid amount.

    Args:
        account_id: ID of the paying family's account
        amount: Payment amount; negative values record a reversal
        date: Date the payment was made
        receipt: Optional receipt image bytes (stored as-is)
        receipt_content_type: MIME type of the receipt
        receipt_filename: Original filename of the receipt
        source: Where the payment came from (manual, receipt scan, import)
        note: Free-form note

    Returns:
        The created Payment (status=validated, unseen by the admin)

    Raises:
        AccountNotFoundError: If the account doesn't exist
        InvalidInputError: If the amount or date is invalid
        StorageFailureError: If the database fails
    """
    amount = to_amount(amount)
    if not isinstance(date, date_type):
        raise InvalidInputError(f"Invalid payment date: {date!r}")
    if source not in PaymentSource.values:
        raise InvalidInputError(f"Unknown payment source: {source!r}")

    with ledger_transaction():
        ledger = lock_ledger(account_id)

        payment = Payment.objects.create(
            account_id=ledger.account_id,
            amount=amount,
            date=date,
            status=PaymentStatus.VALIDATED,
            source=source,
            note=note,
            receipt=receipt,
            receipt_content_type=receipt_content_type if receipt is not None else '',
            receipt_filename=receipt_filename if receipt is not None else '',
            seen_by_admin=False,
        )

        ledger.paid += amount
        ledger.refresh_figures()

    logger.info(
        "Recorded payment %s of %s for account %s; ledger now %s/%s (%s)",
        payment.pk, amount, ledger.account_id, ledger.paid, ledger.total, ledger.status,
    )
    return payment


def _get_payment_account_id(payment_id):
    try:
        return Payment.objects.values_list('account_id', flat=True).get(pk=payment_id)
    except (Payment.DoesNotExist, ValueError, TypeError):
        raise PaymentNotFoundError(f"Payment with ID {payment_id} not found")


def _lock_payment(payment_id) -> Payment:
    try:
        return Payment.objects.select_for_update().get(pk=payment_id)
    except Payment.DoesNotExist:
        raise PaymentNotFoundError(f"Payment with ID {payment_id} not found")


def reject_payment(*, payment_id) -> Payment:
    """
    Invalidate a payment without deleting it.

    Rejecting an already rejected payment changes nothing.

    Raises:
        PaymentNotFoundError: If the payment doesn't exist
        StorageFailureError: If the database fails
    """
    account_id = _get_payment_account_id(payment_id)

    with ledger_transaction():
        ledger = lock_ledger(account_id)
        payment = _lock_payment(payment_id)

        if payment.is_rejected:
            return payment

        payment.status = PaymentStatus.REJECTED
        payment.seen_by_admin = True
        payment.save(update_fields=['status', 'seen_by_admin', 'updated_at'])

        _reverse_payment(ledger, payment)

    logger.info(
        "Rejected payment %s of %s for account %s; ledger now %s/%s (%s)",
        payment.pk, payment.amount, account_id, ledger.paid, ledger.total, ledger.status,
    )
    return payment


def delete_payment(*, payment_id) -> None:
    """
    Permanently remove a payment.

    The amount is reversed from the ledger unless the payment was already
    rejected (and therefore already reversed).

    Raises:
        PaymentNotFoundError: If the payment doesn't exist
        StorageFailureError: If the database fails
    """
    account_id = _get_payment_account_id(payment_id)

    with ledger_transaction():
        ledger = lock_ledger(account_id)
        payment = _lock_payment(payment_id)

        if not payment.is_rejected:
            _reverse_payment(ledger, payment)

        payment.delete()

    logger.info(
        "Deleted payment %s for account %s; ledger now %s/%s (%s)",
        payment_id, account_id, ledger.paid, ledger.total, ledger.status,
    )


def rebuild_ledger(*, account_id) -> LedgerSnapshot:
    """
    Recompute a family's ledger figures from its participants and payments.

    Nothing is written. Compare the result with the stored ledger to verify
    that the incremental updates have not drifted.

    Raises:
        AccountNotFoundError: If the account doesn't exist or has no ledger
    """
    from apps.registrations.models import Participant

    if not Ledger.objects.filter(account_id=account_id).exists():
        raise AccountNotFoundError(f"Account with ID {account_id} not found")

    total = Participant.objects.filter(
        account_id=account_id
    ).aggregate(total=Sum('price'))['total'] or ZERO

    paid = Payment.objects.filter(
        account_id=account_id
    ).exclude(
        status=PaymentStatus.REJECTED
    ).aggregate(total=Sum('amount'))['total'] or ZERO

    balance = total - paid
    return LedgerSnapshot(
        total=total,
        paid=paid,
        balance=balance,
        status=ledger_status(paid, balance),
    )


def get_ledger(*, account_id) -> Ledger:
    """
    Read a family's ledger without locking or changing it.

    Raises:
        AccountNotFoundError: If the account doesn't exist or has no ledger
    """
    try:
        return Ledger.objects.select_related('account').get(account_id=account_id)
    except (Ledger.DoesNotExist, ValueError, TypeError):
        raise AccountNotFoundError(f"Account with ID {account_id} not found")


def list_payments(*, account_id):
    """A family's payments, newest first."""
    get_ledger(account_id=account_id)
    return Payment.objects.filter(account_id=account_id).order_by('-date', '-created_at')


def get_payment(*, payment_id) -> Payment:
    """
    Get a payment by ID.

    Raises:
        PaymentNotFoundError: If the payment doesn't exist
    """
    try:
        return Payment.objects.select_related('account').get(pk=payment_id)
    except (Payment.DoesNotExist, ValueError, TypeError):
        raise PaymentNotFoundError(f"Payment with ID {payment_id} not found")


__all__ = [
    'LedgerSnapshot',
    'LedgerStatus',
    'ledger_transaction',
    'lock_ledger',
    'apply_total_change',
    'to_amount',
    'record_payment',
    'reject_payment',
    'delete_payment',
    'rebuild_ledger',
    'get_ledger',
    'list_payments',
    'get_payment',
]
