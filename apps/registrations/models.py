from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .pricing import EVENT_DAYS, ParticipantCategory


class Participant(models.Model):
    """A person registered for the event under a family account."""

    account = models.ForeignKey(
        'accounts.Account',
        on_delete=models.CASCADE,
        related_name='participants'
    )

    # Denormalized copy of the account's name
    leader_name = models.CharField(max_length=150)

    name = models.CharField(max_length=150)
    category = models.CharField(
        max_length=10,
        choices=ParticipantCategory.choices,
    )
    age = models.PositiveSmallIntegerField()
    days = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(EVENT_DAYS[0]),
            MaxValueValidator(EVENT_DAYS[-1]),
        ]
    )

    # Snapshot of pricing.price(category, days)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'participants'
        indexes = [
            models.Index(fields=['account', 'created_at'], name='participants_account_idx'),
            models.Index(fields=['category'], name='participants_category_idx'),
        ]
        ordering = ['account', 'created_at', 'id']

    def __str__(self):
        return f"{self.name} ({self.get_category_display()}, {self.days}d) - {self.price}"

    @property
    def is_family_leader(self):
        """Whether this participant is the account's nominal leader."""
        return self.account.is_leader and self.name == self.account.name
