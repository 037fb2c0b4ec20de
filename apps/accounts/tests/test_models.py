import pytest

from apps.accounts.models import Account, AccountRole


@pytest.mark.django_db
class TestAccountManager:
    """Tests for AccountManager."""

    def test_create_user_without_password_is_unusable(self):
        account = Account.objects.create_user('Paulo')

        assert account.role == AccountRole.FAMILY_LEADER
        assert account.email is None
        assert not account.has_usable_password()

    def test_create_user_requires_name(self):
        with pytest.raises(ValueError):
            Account.objects.create_user('')

    def test_blank_emails_do_not_collide(self):
        Account.objects.create_user('Paulo', email='')
        Account.objects.create_user('Wesley', email='')

        assert Account.objects.filter(email__isnull=True).count() == 2

    def test_create_admin(self):
        admin = Account.objects.create_admin(email='Admin@Example.com', password='secret-pass')

        assert admin.is_admin
        assert admin.is_staff
        assert admin.is_superuser
        assert admin.email == 'Admin@example.com'
        assert admin.check_password('secret-pass')

    def test_create_admin_requires_email(self):
        with pytest.raises(ValueError):
            Account.objects.create_admin(email='', password='secret-pass')

    def test_create_superuser_is_admin(self):
        admin = Account.objects.create_superuser(email='root@example.com', password='secret-pass')

        assert admin.role == AccountRole.ADMIN
        assert admin.name == 'Administrator'

    def test_family_leaders_excludes_admin(self, admin_account, family):
        leaders = list(Account.objects.family_leaders())

        assert leaders == [family]
