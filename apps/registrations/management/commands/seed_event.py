"""
Management command to load the event's official roster and payments.

Usage:
    python manage.py seed_event
    python manage.py seed_event --admin-email admin@example.com --admin-password secret
    python manage.py seed_event --reset-payments

This creates:
- One family account (with ledger) per family leader
- 36 participants, priced from the event pricing table
- 24 official installment payments

Participants are only seeded into an empty database. Payments are only
seeded when none exist, unless --reset-payments is given, in which case
every existing payment is deleted first.
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from apps.accounts.models import Account
from apps.accounts.services import create_family_account
from apps.finance.models import Payment, PaymentSource
from apps.finance.services import (
    delete_payment,
    mark_all_payments_seen,
    record_payment,
)
from apps.registrations.models import Participant
from apps.registrations.pricing import ParticipantCategory
from apps.registrations.services import add_participant

ADULT = ParticipantCategory.ADULT
TEEN = ParticipantCategory.TEEN

# (leader, name, category, age, days)
ROSTER = [
    ("Josué Souza", "Josué Souza", ADULT, 30, 4),
    ("Josué Souza", "Laiane", ADULT, 28, 4),
    ("Elivânia", "Elivânia", ADULT, 35, 4),
    ("Elivânia", "Toniel", ADULT, 40, 4),
    ("Elivânia", "Estela", TEEN, 15, 4),
    ("Vanessa", "Vanessa", ADULT, 33, 4),
    ("Vanessa", "Nicole", ADULT, 29, 4),
    ("Vanessa", "Juan", TEEN, 12, 4),
    ("Vanessa", "Stefani", TEEN, 16, 4),
    ("Paulo", "Paulo", ADULT, 45, 3),
    ("Paulo", "Silmara", ADULT, 41, 3),
    ("Elisângela", "Elisângela", ADULT, 38, 4),
    ("Elisângela", "Kammilly", TEEN, 14, 4),
    ("Elisângela", "Orlando", ADULT, 39, 4),
    ("Elizabete", "Elizabete", ADULT, 50, 4),
    ("Elizabete", "Mario", ADULT, 52, 4),
    ("Vanderson", "Vanderson", ADULT, 31, 4),
    ("Vanderson", "Tamiris", ADULT, 27, 4),
    ("Vanderson", "Heitor", TEEN, 11, 4),
    ("Tamili", "Tamili", ADULT, 26, 4),
    ("Tamili", "Douglas", ADULT, 30, 4),
    ("Elizete", "Elizete", ADULT, 48, 4),
    ("Elizete", "Elias", ADULT, 50, 4),
    ("Vitória Paixão", "Vitória Paixão", ADULT, 22, 2),
    ("Wilde", "Wilde", ADULT, 34, 4),
    ("Wilde", "Huliana", ADULT, 32, 4),
    ("Wilde", "Ilana", TEEN, 13, 4),
    ("Wesley", "Wesley", ADULT, 25, 4),
    ("Priscilla", "Priscilla", ADULT, 36, 4),
    ("Eliana", "Eliana", ADULT, 44, 2),
    ("Eliana", "Renato", ADULT, 46, 2),
    ("Daiana", "Daiana", ADULT, 35, 4),
    ("Daiana", "Emerson", ADULT, 38, 4),
    ("Daiana", "Gabriel", TEEN, 17, 4),
    ("Daiana", "Vitória", TEEN, 10, 4),
    ("Daiana", "Larissa", ADULT, 19, 4),
]

# (leader, amount, date)
OFFICIAL_PAYMENTS = [
    ("Josué Souza", "100.00", date(2026, 1, 16)),
    ("Elivânia", "100.00", date(2026, 1, 17)),
    ("Elivânia", "100.00", date(2026, 2, 6)),
    ("Vanessa", "100.00", date(2026, 1, 16)),
    ("Vanessa", "100.00", date(2026, 2, 16)),
    ("Paulo", "100.00", date(2026, 1, 16)),
    ("Elisângela", "100.00", date(2026, 1, 16)),
    ("Elisângela", "100.00", date(2026, 2, 12)),
    ("Elizabete", "100.00", date(2026, 1, 16)),
    ("Elizabete", "50.00", date(2026, 2, 3)),
    ("Vanderson", "100.00", date(2026, 1, 16)),
    ("Vanderson", "100.00", date(2026, 1, 30)),
    ("Tamili", "100.00", date(2026, 1, 16)),
    ("Tamili", "50.00", date(2026, 2, 3)),
    ("Elizete", "25.00", date(2026, 1, 16)),
    ("Elizete", "50.00", date(2026, 1, 31)),
    ("Vitória Paixão", "50.00", date(2026, 1, 16)),
    ("Wilde", "70.00", date(2026, 1, 16)),
    ("Wilde", "85.00", date(2026, 1, 30)),
    ("Wesley", "60.00", date(2026, 1, 16)),
    ("Wesley", "35.00", date(2026, 1, 30)),
    ("Priscilla", "20.00", date(2026, 1, 30)),
    ("Eliana", "100.00", date(2026, 2, 3)),
    ("Daiana", "200.00", date(2026, 2, 11)),
]


class Command(BaseCommand):
    help = "Load the event's official roster and payments"

    def add_arguments(self, parser):
        parser.add_argument(
            '--admin-email',
            help='Create the event administrator with this email',
        )
        parser.add_argument(
            '--admin-password',
            help='Password for the event administrator',
        )
        parser.add_argument(
            '--reset-payments',
            action='store_true',
            help='Delete every payment and load the official ones again',
        )

    def handle(self, *args, **options):
        if options['admin_email']:
            self.create_admin(options['admin_email'], options['admin_password'])

        if Participant.objects.exists():
            self.stdout.write('Participants already registered, skipping roster.')
        else:
            self.seed_roster()

        if options['reset_payments']:
            self.clear_payments()

        if Payment.objects.exists():
            self.stdout.write('Payments already recorded, skipping official payments.')
        else:
            self.seed_payments()

    def create_admin(self, email, password):
        if not password:
            raise CommandError('--admin-password is required with --admin-email')
        if Account.objects.filter(email__iexact=email).exists():
            self.stdout.write(f'Administrator {email} already exists.')
            return
        Account.objects.create_admin(email=email, password=password)
        self.stdout.write(self.style.SUCCESS(f'Created administrator {email}'))

    def seed_roster(self):
        families = {}
        for leader, name, category, age, days in ROSTER:
            if leader not in families:
                families[leader] = create_family_account(name=leader)
            add_participant(
                account_id=families[leader].pk,
                name=name,
                age=age,
                days=days,
                category=category,
            )

        self.stdout.write(self.style.SUCCESS(
            f'Registered {len(ROSTER)} participants in {len(families)} families'
        ))

    def clear_payments(self):
        count = 0
        for payment_id in Payment.objects.values_list('id', flat=True):
            delete_payment(payment_id=payment_id)
            count += 1
        self.stdout.write(f'Deleted {count} payment(s).')

    def seed_payments(self):
        leaders = dict(
            Account.objects.family_leaders().values_list('name', 'id')
        )

        count = 0
        for leader, amount, paid_on in OFFICIAL_PAYMENTS:
            account_id = leaders.get(leader)
            if account_id is None:
                self.stderr.write(self.style.WARNING(f'No family named {leader}, skipping payment'))
                continue
            record_payment(
                account_id=account_id,
                amount=amount,
                date=paid_on,
                source=PaymentSource.IMPORT,
            )
            count += 1

        # Imported payments are already known to the administrator
        mark_all_payments_seen()
        self.stdout.write(self.style.SUCCESS(f'Recorded {count} official payment(s)'))
