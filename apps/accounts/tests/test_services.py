"""
Service layer unit tests for accounts app.

Tests cover:
- Family account creation with its ledger
- Input validation
- Lookups
"""

import pytest
from decimal import Decimal

from apps.accounts.models import AccountRole
from apps.accounts.services import (
    create_family_account,
    get_account,
    list_family_accounts,
)
from apps.accounts.services.exceptions import (
    AccountNotFoundError,
    InvalidInputError,
    NotFoundError,
)
from apps.finance.models import Ledger, LedgerStatus


@pytest.mark.django_db
class TestAccountManagement:
    """Tests for account_management.py service functions."""

    def test_create_family_account_creates_empty_ledger(self):
        account = create_family_account(name='  Vanessa  ')

        assert account.name == 'Vanessa'
        assert account.role == AccountRole.FAMILY_LEADER
        assert account.is_leader is True

        ledger = Ledger.objects.get(account=account)
        assert ledger.total == Decimal('0.00')
        assert ledger.paid == Decimal('0.00')
        assert ledger.balance == Decimal('0.00')
        assert ledger.status == LedgerStatus.SETTLED

    def test_create_family_account_blank_name(self):
        with pytest.raises(InvalidInputError):
            create_family_account(name='   ')

        assert not Ledger.objects.exists()

    def test_create_family_account_duplicate_email(self, other_family):
        with pytest.raises(InvalidInputError):
            create_family_account(name='Someone', email='elivania@example.com')

    def test_get_account(self, family):
        assert get_account(account_id=family.id) == family

    def test_get_account_not_found(self, db):
        with pytest.raises(AccountNotFoundError):
            get_account(account_id=99999)

    def test_not_found_is_a_not_found_error(self, db):
        with pytest.raises(NotFoundError):
            get_account(account_id='not-an-id')

    def test_list_family_accounts_excludes_admin(self, admin_account, family, other_family):
        names = [a.name for a in list_family_accounts()]

        assert names == ['Elivânia', 'Josué Souza']

    def test_new_ledger_matches_rebuilt_ledger(self):
        from apps.finance.services import rebuild_ledger

        account = create_family_account(name='Nova')
        ledger = Ledger.objects.get(account=account)
        rebuilt = rebuild_ledger(account_id=account.id)

        assert (ledger.total, ledger.paid, ledger.balance, ledger.status) == (
            rebuilt.total, rebuilt.paid, rebuilt.balance, rebuilt.status
        )
