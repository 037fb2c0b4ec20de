from decimal import Decimal

from django.db import models


class LedgerStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PARTIAL = 'partial', 'Partial'
    SETTLED = 'settled', 'Settled'


class PaymentStatus(models.TextChoices):
    VALIDATED = 'validated', 'Validated'
    REJECTED = 'rejected', 'Rejected'


class PaymentSource(models.TextChoices):
    MANUAL = 'manual', 'Manual entry'
    RECEIPT_SCAN = 'receipt_scan', 'Receipt scan'
    IMPORT = 'import', 'Import'


def ledger_status(paid, balance):
    """Status of a ledger with the given paid amount and balance."""
    if balance <= 0:
        return LedgerStatus.SETTLED
    if paid > 0:
        return LedgerStatus.PARTIAL
    return LedgerStatus.PENDING


class Ledger(models.Model):
    """Running totals of what a family owes and has paid."""

    account = models.OneToOneField(
        'accounts.Account',
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='ledger'
    )

    # Sum of the family's participant prices
    total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    # Sum of the family's non-rejected payments
    paid = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    balance = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    status = models.CharField(
        max_length=10,
        choices=LedgerStatus.choices,
        default=LedgerStatus.PENDING
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ledgers'
        indexes = [
            models.Index(fields=['status'], name='ledgers_status_idx'),
        ]

    def __str__(self):
        return f"{self.account.name}: {self.paid} / {self.total} ({self.status})"

    def refresh_figures(self):
        """Recompute balance and status from total and paid, then save."""
        self.balance = self.total - self.paid
        self.status = ledger_status(self.paid, self.balance)
        self.save(update_fields=['total', 'paid', 'balance', 'status', 'updated_at'])


class Payment(models.Model):
    """An installment (or a signed manual correction) paid by a family."""

    account = models.ForeignKey(
        'accounts.Account',
        on_delete=models.CASCADE,
        related_name='payments'
    )

    # Negative amounts are reversals entered by the administrator
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    date = models.DateField()

    status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.VALIDATED
    )
    source = models.CharField(
        max_length=20,
        choices=PaymentSource.choices,
        default=PaymentSource.MANUAL
    )
    note = models.TextField(blank=True)

    # Receipt image, stored as an opaque blob
    receipt = models.BinaryField(null=True, blank=True, editable=False)
    receipt_content_type = models.CharField(max_length=100, blank=True)
    receipt_filename = models.CharField(max_length=255, blank=True)

    # Notification badge for the administrator
    seen_by_admin = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['account', 'status'], name='payments_account_status_idx'),
            models.Index(fields=['seen_by_admin', 'created_at'], name='payments_unseen_idx'),
            models.Index(fields=['date'], name='payments_date_idx'),
        ]
        ordering = ['-date', '-created_at']

    def __str__(self):
        return f"{self.account.name} paid {self.amount} on {self.date} ({self.status})"

    @property
    def is_rejected(self):
        return self.status == PaymentStatus.REJECTED

    @property
    def has_receipt(self):
        return self.receipt is not None
