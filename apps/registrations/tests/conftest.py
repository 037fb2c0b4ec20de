import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import Account
from apps.accounts.services import create_family_account
from apps.registrations.pricing import ParticipantCategory
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
    """Create and return a family account with an empty ledger."""
    return create_family_account(name='Elivânia')


@pytest.fixture
def other_family(db):
    """Create and return another family account."""
    return create_family_account(name='Paulo')


@pytest.fixture
def leader(family):
    """The family's leader registered as an adult for all four days."""
    return add_participant(account_id=family.id, name='Elivânia', age=35, days=4)


@pytest.fixture
def teen(family):
    """A 17-year-old registered for all four days."""
    return add_participant(
        account_id=family.id,
        name='Estela',
        age=17,
        days=4,
        category=ParticipantCategory.TEEN,
    )
