"""
Event Statistics Module
=======================

Read-only queries behind the administrator's dashboard: money collected
and still pending, occupied spots, the per-family overview and the CSV
export of every participant.

Example:
    Dashboard numbers::

        from apps.finance.services import EventStatistics

        stats = EventStatistics.event_stats()
        print(f"Collected {stats['total_collected']} of "
              f"{stats['total_collected'] + stats['total_pending']}")

Note:
    Nothing here locks or modifies a ledger. Figures are read from the
    stored ledgers, so they reflect the last committed operation.
"""

import csv
from decimal import Decimal

from django.conf import settings
from django.db.models import Count, Prefetch, Sum

from apps.accounts.models import Account
from apps.finance.models import Ledger, LedgerStatus, Payment
from apps.registrations.models import Participant
from apps.registrations.pricing import ParticipantCategory

ZERO = Decimal('0.00')

EXPORT_COLUMNS = [
    'leader',
    'name',
    'category',
    'age',
    'days',
    'price',
    'family_total',
    'family_paid',
    'family_balance',
    'family_status',
]


class EventStatistics:
    """
    Aggregate queries over all families.

    Methods:
        event_stats: Totals for the dashboard header.
        families_overview: Every family with its ledger, members and payments.
        export_participants_csv: Write all participants as CSV rows.
    """

    @staticmethod
    def event_stats():
        """
        Totals across every family ledger.

        Returns:
            dict: A dictionary containing:
                - total_collected (Decimal): Sum of ledger ``paid``.
                - total_pending (Decimal): Sum of ledger ``balance``.
                - occupied_spots (int): Participants who are not exempt.
                - total_spots (int): ``EVENT_TOTAL_SPOTS`` setting.
                - families (int): Number of family ledgers.
                - status_counts (dict): Ledgers per status.
        """
        totals = Ledger.objects.aggregate(
            collected=Sum('paid'),
            pending=Sum('balance'),
            families=Count('account'),
        )

        occupied = Participant.objects.exclude(
            category=ParticipantCategory.EXEMPT
        ).count()

        status_counts = {value: 0 for value in LedgerStatus.values}
        for row in Ledger.objects.values('status').annotate(count=Count('account')):
            status_counts[row['status']] = row['count']

        return {
            'total_collected': totals['collected'] or ZERO,
            'total_pending': totals['pending'] or ZERO,
            'occupied_spots': occupied,
            'total_spots': settings.EVENT_TOTAL_SPOTS,
            'families': totals['families'],
            'status_counts': status_counts,
        }

    @staticmethod
    def families_overview():
        """
        Every family account with its ledger, members and payments.

        Payments are ordered newest first. Uses three queries regardless of
        the number of families.
        """
        return (
            Account.objects.family_leaders()
            .select_related('ledger')
            .prefetch_related(
                Prefetch(
                    'participants',
                    queryset=Participant.objects.order_by('created_at', 'id'),
                ),
                Prefetch(
                    'payments',
                    queryset=Payment.objects.order_by('-date', '-created_at'),
                ),
            )
            .order_by('name')
        )

    @staticmethod
    def export_participants_csv(stream):
        """
        Write one CSV row per participant, with their family's ledger figures.

        Args:
            stream: Any object with a ``write`` method (file, HttpResponse).

        Returns:
            int: Number of participant rows written.
        """
        writer = csv.writer(stream)
        writer.writerow(EXPORT_COLUMNS)

        participants = (
            Participant.objects
            .select_related('account__ledger')
            .order_by('leader_name', 'created_at', 'id')
        )

        count = 0
        for participant in participants:
            ledger = getattr(participant.account, 'ledger', None)
            writer.writerow([
                participant.leader_name,
                participant.name,
                participant.category,
                participant.age,
                participant.days,
                participant.price,
                ledger.total if ledger else '',
                ledger.paid if ledger else '',
                ledger.balance if ledger else '',
                ledger.status if ledger else '',
            ])
            count += 1

        return count
