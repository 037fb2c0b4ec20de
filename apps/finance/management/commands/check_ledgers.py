"""
Management command to verify every stored ledger against its inputs.

Usage:
    python manage.py check_ledgers

Each ledger is rebuilt in memory from its participants and non-rejected
payments and compared with the stored figures. Nothing is written.
Exits with an error when any ledger has drifted.
"""

from django.core.management.base import BaseCommand, CommandError

from apps.finance.models import Ledger
from apps.finance.services import rebuild_ledger


class Command(BaseCommand):
    help = 'Compare stored ledgers with ledgers rebuilt from participants and payments'

    def handle(self, *args, **options):
        drifted = 0
        ledgers = Ledger.objects.select_related('account').order_by('account__name')

        for ledger in ledgers:
            rebuilt = rebuild_ledger(account_id=ledger.account_id)
            stored = (ledger.total, ledger.paid, ledger.balance, ledger.status)
            if stored == tuple(rebuilt):
                continue

            drifted += 1
            self.stdout.write(self.style.WARNING(
                f'{ledger.account.name}: stored total={ledger.total} paid={ledger.paid} '
                f'balance={ledger.balance} status={ledger.status}; rebuilt '
                f'total={rebuilt.total} paid={rebuilt.paid} '
                f'balance={rebuilt.balance} status={rebuilt.status}'
            ))

        if drifted:
            raise CommandError(f'{drifted} ledger(s) drifted')

        self.stdout.write(self.style.SUCCESS(f'All {ledgers.count()} ledger(s) consistent'))
