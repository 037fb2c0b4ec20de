import pytest
from decimal import Decimal
from io import StringIO

from django.core.management import call_command

from apps.accounts.models import Account
from apps.finance.models import Ledger, LedgerStatus, Payment, PaymentSource
from apps.finance.services import rebuild_ledger
from apps.registrations.models import Participant


def seed(*args):
    out = StringIO()
    call_command('seed_event', *args, stdout=out, stderr=StringIO())
    return out.getvalue()


@pytest.mark.django_db
class TestSeedEvent:
    """Tests for the seed_event management command."""

    def test_seeds_roster_and_payments(self):
        seed()

        assert Account.objects.family_leaders().count() == 15
        assert Participant.objects.count() == 36
        assert Payment.objects.count() == 24
        assert not Payment.objects.filter(seen_by_admin=False).exists()
        assert set(Payment.objects.values_list('source', flat=True)) == {PaymentSource.IMPORT}

    def test_family_figures(self):
        seed()

        daiana = Ledger.objects.get(account__name='Daiana')
        assert daiana.total == Decimal('1600.00')
        assert daiana.paid == Decimal('200.00')
        assert daiana.balance == Decimal('1400.00')
        assert daiana.status == LedgerStatus.PARTIAL

        paulo = Ledger.objects.get(account__name='Paulo')
        assert paulo.total == Decimal('740.00')

    def test_event_totals(self):
        seed()

        ledgers = Ledger.objects.all()
        assert sum(l.total for l in ledgers) == Decimal('12440.00')
        assert sum(l.paid for l in ledgers) == Decimal('1995.00')

    def test_ledgers_match_rebuild(self):
        seed()

        for ledger in Ledger.objects.all():
            rebuilt = rebuild_ledger(account_id=ledger.account_id)
            assert (ledger.total, ledger.paid, ledger.balance) == (
                rebuilt.total, rebuilt.paid, rebuilt.balance
            )

    def test_second_run_changes_nothing(self):
        seed()
        output = seed()

        assert 'skipping roster' in output
        assert Participant.objects.count() == 36
        assert Payment.objects.count() == 24

    def test_reset_payments(self):
        seed()
        Payment.objects.filter(account__name='Daiana').update(note='changed')

        seed('--reset-payments')

        assert Payment.objects.count() == 24
        assert not Payment.objects.filter(note='changed').exists()
        assert Ledger.objects.get(account__name='Daiana').paid == Decimal('200.00')

    def test_creates_admin(self):
        seed('--admin-email', 'admin@example.com', '--admin-password', 'AdminPass123!')

        admin = Account.objects.get(email='admin@example.com')
        assert admin.is_admin
        assert admin.check_password('AdminPass123!')
