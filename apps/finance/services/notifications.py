"""Administrator notifications for payments nobody has looked at yet."""

from django.db.models import QuerySet

from apps.finance.models import Payment

from .exceptions import PaymentNotFoundError


def unseen_payments() -> QuerySet:
    """Payments the administrator has not seen, oldest first."""
    return (
        Payment.objects
        .filter(seen_by_admin=False)
        .select_related('account')
        .order_by('created_at')
    )


def mark_payment_seen(*, payment_id) -> Payment:
    """
    Clear the notification badge of one payment.

    Raises:
        PaymentNotFoundError: If the payment doesn't exist
    """
    try:
        payment = Payment.objects.get(pk=payment_id)
    except (Payment.DoesNotExist, ValueError, TypeError):
        raise PaymentNotFoundError(f"Payment with ID {payment_id} not found")

    if not payment.seen_by_admin:
        payment.seen_by_admin = True
        payment.save(update_fields=['seen_by_admin', 'updated_at'])
    return payment


def mark_all_payments_seen() -> int:
    """Clear every notification badge; returns how many were cleared."""
    return Payment.objects.filter(seen_by_admin=False).update(seen_by_admin=True)
