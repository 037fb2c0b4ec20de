"""
Event pricing table.

This is the only place the per-person prices live. Services, serializers
and the seed command all import ``price`` and ``categorize_age`` from here.

Prices depend on the participant category and on how many of the event
days they attend::

    >>> price(ParticipantCategory.ADULT, 4)
    Decimal('400.00')
    >>> price(ParticipantCategory.TEEN, 3)
    Decimal('185.00')
    >>> price(ParticipantCategory.EXEMPT, 2)
    Decimal('0.00')

Day counts outside the table price at zero; ``price`` never raises.
"""

from decimal import Decimal

from django.db import models


class ParticipantCategory(models.TextChoices):
    ADULT = 'adult', 'Adult'
    TEEN = 'teen', 'Teen'
    EXEMPT = 'exempt', 'Exempt'


EVENT_DAYS = (1, 2, 3, 4)

ZERO = Decimal('0.00')

PRICE_TABLE = {
    ParticipantCategory.TEEN: {
        1: Decimal('75.00'),
        2: Decimal('150.00'),
        3: Decimal('185.00'),
        4: Decimal('200.00'),
    },
    ParticipantCategory.ADULT: {
        1: Decimal('150.00'),
        2: Decimal('300.00'),
        3: Decimal('370.00'),
        4: Decimal('400.00'),
    },
}

# Inclusive upper age bounds, checked in order
EXEMPT_MAX_AGE = 9
TEEN_MAX_AGE = 17


def price(category, days) -> Decimal:
    """
    Price for one participant of ``category`` attending ``days`` days.

    Exempt participants and unknown categories or day counts price at zero.
    """
    return PRICE_TABLE.get(category, {}).get(days, ZERO)


def categorize_age(age: int) -> str:
    """
    Category a participant of the given age belongs to.

    ``age <= 9`` is exempt, ``10..17`` is teen and ``>= 18`` is adult.
    """
    if age <= EXEMPT_MAX_AGE:
        return ParticipantCategory.EXEMPT
    if age <= TEEN_MAX_AGE:
        return ParticipantCategory.TEEN
    return ParticipantCategory.ADULT
