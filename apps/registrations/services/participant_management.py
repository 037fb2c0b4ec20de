"""
Participant management service.

Adding, editing and removing participants changes what a family owes, so
each operation updates the family's ledger in the same transaction and
under the same row lock (see ``apps.finance.services.ledger_reconciliation``).
"""

import logging
from typing import Optional

from django.db.models import QuerySet

from apps.finance.services.ledger_reconciliation import (
    apply_total_change,
    get_ledger,
    ledger_transaction,
    lock_ledger,
)
from apps.registrations.models import Participant
from apps.registrations.pricing import (
    EVENT_DAYS,
    ParticipantCategory,
    categorize_age,
    price,
)

from .exceptions import InvalidInputError, ParticipantNotFoundError

logger = logging.getLogger(__name__)


def _clean_name(name) -> str:
    name = (name or '').strip()
    if not name:
        raise InvalidInputError("Participant name is required")
    return name


def _validate_age(age) -> int:
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidInputError(f"Age must be an integer, got {age!r}")
    if age < 0:
        raise InvalidInputError("Age must not be negative")
    return age


def _validate_days(days) -> int:
    if isinstance(days, bool) or not isinstance(days, int):
        raise InvalidInputError(f"Day count must be an integer, got {days!r}")
    if days not in EVENT_DAYS:
        raise InvalidInputError(
            f"Day count must be between {EVENT_DAYS[0]} and {EVENT_DAYS[-1]}"
        )
    return days


def _validate_category(category) -> str:
    if category not in ParticipantCategory.values:
        raise InvalidInputError(
            f"Unknown category {category!r}. "
            f"Valid options: {', '.join(ParticipantCategory.values)}"
        )
    return ParticipantCategory(category)


def add_participant(
    *,
    account_id,
    name: str,
    age: int,
    days: int,
    category: Optional[str] = None,
) -> Participant:
    """
    Register a participant under a family and add their price to its ledger.

    Args:
        account_id: ID of the family account
        name: Participant's display name
        age: Age in years
        days: Number of event days attended (1-4)
        category: Explicit category; derived from ``age`` when omitted

    Returns:
        Created Participant instance with its price snapshot

    Raises:
        AccountNotFoundError: If the account doesn't exist
        InvalidInputError: If name, age, days or category is invalid
        StorageFailureError: If the database fails
    """
    name = _clean_name(name)
    age = _validate_age(age)
    days = _validate_days(days)
    category = categorize_age(age) if category is None else _validate_category(category)
    participant_price = price(category, days)

    with ledger_transaction():
        ledger = lock_ledger(account_id)

        if _is_leader_name_taken(ledger.account, name):
            raise InvalidInputError(
                f"{name} is already registered as the family's leader"
            )

        participant = Participant.objects.create(
            account=ledger.account,
            leader_name=ledger.account.name,
            name=name,
            category=category,
            age=age,
            days=days,
            price=participant_price,
        )

        apply_total_change(ledger, participant_price)

    logger.info(
        "Added participant %s (%s, %s days, %s) to account %s; ledger total %s",
        participant.pk, category, days, participant_price, ledger.account_id, ledger.total,
    )
    return participant


def _is_leader_name_taken(account, name):
    """Whether the leader's name already belongs to one of the family's participants."""
    return (
        account.is_leader
        and name == account.name
        and Participant.objects.filter(account=account, name=name).exists()
    )


def _get_participant_account_id(participant_id):
    try:
        return Participant.objects.values_list('account_id', flat=True).get(pk=participant_id)
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise ParticipantNotFoundError(f"Participant with ID {participant_id} not found")


def _lock_participant(participant_id) -> Participant:
    try:
        return (
            Participant.objects
            .select_for_update()
            .select_related('account')
            .get(pk=participant_id)
        )
    except Participant.DoesNotExist:
        raise ParticipantNotFoundError(f"Participant with ID {participant_id} not found")


def remove_participant(*, participant_id) -> None:
    """
    Remove a participant and take their price back out of the family's ledger.

    Raises:
        ParticipantNotFoundError: If the participant doesn't exist
        StorageFailureError: If the database fails
    """
    account_id = _get_participant_account_id(participant_id)

    with ledger_transaction():
        ledger = lock_ledger(account_id)
        participant = _lock_participant(participant_id)

        apply_total_change(ledger, -participant.price)
        participant.delete()

    logger.info(
        "Removed participant %s from account %s; ledger total %s",
        participant_id, account_id, ledger.total,
    )


def edit_participant(
    *,
    participant_id,
    name: Optional[str] = None,
    age: Optional[int] = None,
) -> Participant:
    """
    Rename a participant and/or change their age.

    A new age reclassifies the participant (see ``pricing.categorize_age``),
    reprices them for the same number of days and applies the price
    difference to the family's ledger.

    Renaming the family's nominal leader also renames the account and the
    leader name recorded on every participant of the family.

    Args:
        participant_id: ID of the participant
        name: New display name, or None to keep it
        age: New age, or None to keep it

    Returns:
        Updated Participant instance

    Raises:
        ParticipantNotFoundError: If the participant doesn't exist
        InvalidInputError: If name or age is invalid
        StorageFailureError: If the database fails
    """
    if name is not None:
        name = _clean_name(name)
    if age is not None:
        age = _validate_age(age)

    account_id = _get_participant_account_id(participant_id)

    with ledger_transaction():
        ledger = lock_ledger(account_id)
        participant = _lock_participant(participant_id)
        update_fields = ['updated_at']

        if age is not None:
            new_category = categorize_age(age)
            new_price = price(new_category, participant.days)
            diff = new_price - participant.price

            participant.age = age
            participant.category = new_category
            participant.price = new_price
            update_fields += ['age', 'category', 'price']

            if diff:
                apply_total_change(ledger, diff)

        if name is not None and name != participant.name:
            account = ledger.account
            if account.is_leader and name == account.name:
                raise InvalidInputError(
                    f"{name} is the family's leader; pick a different name"
                )
            if participant.is_family_leader:
                account.name = name
                account.save(update_fields=['name'])
                Participant.objects.filter(account=account).update(leader_name=name)
                participant.leader_name = name
                logger.info("Renamed family leader of account %s to %s", account.pk, name)

            participant.name = name
            update_fields += ['name', 'leader_name']

        participant.save(update_fields=update_fields)

    return participant


def list_participants(*, account_id) -> QuerySet:
    """
    A family's participants in registration order.

    Raises:
        AccountNotFoundError: If the account doesn't exist
    """
    get_ledger(account_id=account_id)
    return Participant.objects.filter(account_id=account_id).order_by('created_at', 'id')


def get_participant(*, participant_id) -> Participant:
    """
    Get a participant by ID.

    Raises:
        ParticipantNotFoundError: If the participant doesn't exist
    """
    try:
        return Participant.objects.select_related('account').get(pk=participant_id)
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise ParticipantNotFoundError(f"Participant with ID {participant_id} not found")
