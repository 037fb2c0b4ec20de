"""
Account management service.

Family accounts never exist without their ledger, so both rows are
created in the same transaction.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import Account, AccountRole

from .exceptions import AccountNotFoundError, InvalidInputError

logger = logging.getLogger(__name__)


@transaction.atomic
def create_family_account(*, name: str, email: Optional[str] = None) -> Account:
    """
    Create a family-leader account together with its empty ledger.

    Args:
        name: Leader's display name
        email: Optional contact email (must be unique when given)

    Returns:
        Created Account instance

    Raises:
        InvalidInputError: If name is blank or the email is already taken
    """
    from apps.finance.models import Ledger, ledger_status

    name = (name or '').strip()
    if not name:
        raise InvalidInputError("Account name is required")

    if email and Account.objects.filter(email__iexact=email).exists():
        raise InvalidInputError(f"Email {email} is already registered")

    account = Account.objects.create_user(
        name=name,
        email=email or None,
        role=AccountRole.FAMILY_LEADER,
        is_leader=True,
    )
    # An empty ledger owes nothing, so it starts settled
    Ledger.objects.create(account=account, status=ledger_status(0, 0))

    logger.info("Created family account %s (%s)", account.pk, account.name)
    return account


def get_account(*, account_id) -> Account:
    """
    Get an account by ID.

    Raises:
        AccountNotFoundError: If the account doesn't exist
    """
    try:
        return Account.objects.get(pk=account_id)
    except (Account.DoesNotExist, ValueError, TypeError):
        raise AccountNotFoundError(f"Account with ID {account_id} not found")


def list_family_accounts() -> QuerySet:
    """Family-leader accounts with their ledger, ordered by name."""
    return (
        Account.objects.family_leaders()
        .select_related('ledger')
        .order_by('name')
    )
