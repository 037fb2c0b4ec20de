import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import Account
from apps.accounts.services import create_family_account
from apps.finance.services import record_payment
from apps.registrations.services import add_participant


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_account(db):
    """Create and return the event administrator."""
    return Account.objects.create_admin(
        email='admin@example.com',
        password='AdminPass123!',
    )


@pytest.fixture
def admin_client(api_client, admin_account):
    """Return an API client authenticated as the administrator using JWT."""
    refresh = RefreshToken.for_user(admin_account)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def family(db):
    """A family owing 400.00 (one adult, four days)."""
    account = create_family_account(name='Josué Souza')
    add_participant(account_id=account.id, name='Josué Souza', age=30, days=4)
    return account


@pytest.fixture
def other_family(db):
    """A family owing 740.00 (two adults, three days)."""
    account = create_family_account(name='Paulo')
    add_participant(account_id=account.id, name='Paulo', age=45, days=3)
    add_participant(account_id=account.id, name='Silmara', age=41, days=3)
    return account


@pytest.fixture
def payment(family):
    """A validated installment of 100.00."""
    return record_payment(
        account_id=family.id,
        amount=Decimal('100.00'),
        date=date(2026, 1, 16),
    )


@pytest.fixture
def receipt_bytes():
    """A few bytes standing in for a JPEG receipt."""
    return b'\xff\xd8\xff\xe0fake-jpeg-receipt'
