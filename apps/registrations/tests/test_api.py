import pytest
from django.urls import reverse
from rest_framework import status

from apps.finance.models import Ledger
from apps.registrations.models import Participant


# =============================================================================
# Participants of a family
# =============================================================================

@pytest.mark.django_db
class TestAccountParticipants:
    """Tests for GET/POST /api/accounts/{id}/participants/"""

    def test_list(self, api_client, family, leader, teen):
        url = reverse('registrations:account-participants', kwargs={'account_id': family.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Elivânia', 'Estela']
        assert response.data[0]['is_family_leader'] is True
        assert response.data[1]['is_family_leader'] is False

    def test_list_unknown_family(self, api_client, db):
        url = reverse('registrations:account-participants', kwargs={'account_id': 99999})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_add(self, api_client, family):
        url = reverse('registrations:account-participants', kwargs={'account_id': family.id})
        response = api_client.post(url, {'name': 'Toniel', 'age': 30, 'days': 4}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['participant']['category'] == 'adult'
        assert response.data['participant']['price'] == '400.00'
        assert response.data['ledger']['total'] == '400.00'
        assert response.data['ledger']['status'] == 'pending'

    def test_add_with_explicit_category(self, api_client, family):
        url = reverse('registrations:account-participants', kwargs={'account_id': family.id})
        response = api_client.post(url, {
            'name': 'Gabriel',
            'age': 17,
            'days': 3,
            'category': 'teen',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['participant']['price'] == '185.00'

    @pytest.mark.parametrize('payload', [
        {'name': 'Toniel', 'age': 30, 'days': 5},
        {'name': 'Toniel', 'age': 30, 'days': 0},
        {'name': 'Toniel', 'age': -1, 'days': 4},
        {'name': 'Toniel', 'age': 30, 'days': 4, 'category': 'senior'},
        {'name': '', 'age': 30, 'days': 4},
        {'age': 30, 'days': 4},
    ])
    def test_add_invalid(self, api_client, family, payload):
        url = reverse('registrations:account-participants', kwargs={'account_id': family.id})
        response = api_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert not Participant.objects.exists()

    def test_add_unknown_family(self, api_client, db):
        url = reverse('registrations:account-participants', kwargs={'account_id': 99999})
        response = api_client.post(url, {'name': 'Toniel', 'age': 30, 'days': 4}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# Single participant
# =============================================================================

@pytest.mark.django_db
class TestParticipantDetail:
    """Tests for GET/PATCH/DELETE /api/participants/{id}/"""

    def test_get(self, api_client, teen):
        url = reverse('registrations:participant-detail', kwargs={'pk': teen.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Estela'

    def test_patch_age_reprices(self, api_client, family, teen):
        url = reverse('registrations:participant-detail', kwargs={'pk': teen.id})
        response = api_client.patch(url, {'age': 18}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['participant']['category'] == 'adult'
        assert response.data['participant']['price'] == '400.00'
        assert response.data['ledger']['total'] == '400.00'

    def test_patch_leader_name(self, api_client, family, leader):
        url = reverse('registrations:participant-detail', kwargs={'pk': leader.id})
        response = api_client.patch(url, {'name': 'Eli'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        family.refresh_from_db()
        assert family.name == 'Eli'

    def test_patch_empty_body(self, api_client, teen):
        url = reverse('registrations:participant-detail', kwargs={'pk': teen.id})
        response = api_client.patch(url, {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete(self, api_client, family, leader, teen):
        url = reverse('registrations:participant-detail', kwargs={'pk': teen.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['ledger']['total'] == '400.00'
        assert Ledger.objects.get(account=family).total == 400

    def test_delete_not_found(self, api_client, db):
        url = reverse('registrations:participant-detail', kwargs={'pk': 99999})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_delete_schema_matches_response(self, api_client, family, leader, teen):
        from drf_spectacular.generators import SchemaGenerator

        schema = SchemaGenerator().get_schema(request=None, public=True)
        deletes = [
            operation['delete']
            for path, operation in schema['paths'].items()
            if path.startswith('/api/participants/') and 'delete' in operation
        ]
        assert len(deletes) == 1
        ref = deletes[0]['responses']['200']['content']['application/json']['schema']['$ref']
        component = schema['components']['schemas'][ref.rsplit('/', 1)[-1]]
        assert list(component['properties']) == ['ledger']

        url = reverse('registrations:participant-detail', kwargs={'pk': teen.id})
        response = api_client.delete(url)
        assert set(response.data) == set(component['properties'])
