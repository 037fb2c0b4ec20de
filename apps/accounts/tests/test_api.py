import pytest
from django.urls import reverse
from rest_framework import status

from apps.accounts.models import Account
from apps.finance.models import Ledger


# =============================================================================
# Admin Login
# =============================================================================

@pytest.mark.django_db
class TestAdminLogin:
    """Tests for POST /api/auth/token/"""

    def test_login_success(self, api_client, admin_account):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {
            'email': 'admin@example.com',
            'password': 'AdminPass123!',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data
        assert 'refresh' in response.data

    def test_login_wrong_password(self, api_client, admin_account):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {
            'email': 'admin@example.com',
            'password': 'wrong',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_family_account_cannot_log_in(self, api_client, other_family):
        url = reverse('token_obtain_pair')
        response = api_client.post(url, {
            'email': 'elivania@example.com',
            'password': '',
        }, format='json')

        assert response.status_code in (
            status.HTTP_400_BAD_REQUEST,
            status.HTTP_401_UNAUTHORIZED,
        )


# =============================================================================
# Accounts
# =============================================================================

@pytest.mark.django_db
class TestAccountList:
    """Tests for GET /api/accounts/"""

    def test_list_is_open(self, api_client, family, other_family, admin_account):
        url = reverse('accounts:account-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        names = [a['name'] for a in response.data]
        assert names == ['Elivânia', 'Josué Souza']


@pytest.mark.django_db
class TestAccountDetail:
    """Tests for GET /api/accounts/{id}/"""

    def test_detail_includes_ledger(self, api_client, family):
        url = reverse('accounts:account-detail', kwargs={'pk': family.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Josué Souza'
        assert response.data['ledger']['total'] == '0.00'
        assert response.data['ledger']['status'] == 'settled'

    def test_detail_not_found(self, api_client, db):
        url = reverse('accounts:account-detail', kwargs={'pk': 99999})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestAccountCreate:
    """Tests for POST /api/accounts/"""

    def test_admin_creates_family(self, admin_client):
        url = reverse('accounts:account-list')
        response = admin_client.post(url, {'name': 'Wilde'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Wilde'
        assert response.data['is_leader'] is True
        assert Ledger.objects.filter(account_id=response.data['id']).exists()

    def test_anonymous_cannot_create(self, api_client, db):
        url = reverse('accounts:account-list')
        response = api_client.post(url, {'name': 'Wilde'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert not Account.objects.filter(name='Wilde').exists()

    def test_family_cannot_create(self, family_client):
        url = reverse('accounts:account-list')
        response = family_client.post(url, {'name': 'Wilde'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_blank_name_rejected(self, admin_client):
        url = reverse('accounts:account-list')
        response = admin_client.post(url, {'name': '   '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_duplicate_email_rejected(self, admin_client, other_family):
        url = reverse('accounts:account-list')
        response = admin_client.post(url, {
            'name': 'Someone',
            'email': 'elivania@example.com',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data


@pytest.mark.django_db
class TestHealthCheck:
    """Tests for GET /api/health/"""

    def test_health(self, api_client, db):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
