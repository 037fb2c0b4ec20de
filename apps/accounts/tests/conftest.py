import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import Account
from apps.accounts.services import create_family_account


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
def family(db):
    """Create and return a family account with an empty ledger."""
    return create_family_account(name='Josué Souza')


@pytest.fixture
def other_family(db):
    """Create and return another family account."""
    return create_family_account(name='Elivânia', email='elivania@example.com')


@pytest.fixture
def admin_client(api_client, admin_account):
    """Return an API client authenticated as the administrator using JWT."""
    refresh = RefreshToken.for_user(admin_account)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def family_client(family):
    """Return an API client carrying a JWT for a family account."""
    client = APIClient()
    refresh = RefreshToken.for_user(family)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client
