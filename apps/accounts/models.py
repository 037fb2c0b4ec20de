from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models


class AccountRole(models.TextChoices):
    ADMIN = 'admin', 'Administrator'
    FAMILY_LEADER = 'family_leader', 'Family leader'


class AccountManager(BaseUserManager):
    """Manager for family-leader accounts and the event administrator."""

    def create_user(self, name, email=None, password=None, **extra_fields):
        if not name:
            raise ValueError('Name is required')

        email = self.normalize_email(email) if email else None
        account = self.model(name=name, email=email, **extra_fields)
        if password:
            account.set_password(password)
        else:
            account.set_unusable_password()
        account.save(using=self._db)
        return account

    def create_admin(self, email, password, name='Administrator', **extra_fields):
        extra_fields.setdefault('role', AccountRole.ADMIN)
        extra_fields.setdefault('is_leader', False)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if not email:
            raise ValueError('Administrator needs an email to log in')
        if extra_fields.get('role') != AccountRole.ADMIN:
            raise ValueError('Administrator must have role=admin')

        return self.create_user(name, email=email, password=password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        name = extra_fields.pop('name', None) or 'Administrator'
        return self.create_admin(email, password, name=name, **extra_fields)

    def family_leaders(self):
        return self.filter(role=AccountRole.FAMILY_LEADER)


class Account(AbstractBaseUser, PermissionsMixin):
    """A family leader's account, or the single event administrator."""

    name = models.CharField(max_length=150)
    email = models.EmailField(unique=True, max_length=255, null=True, blank=True)

    role = models.CharField(
        max_length=20,
        choices=AccountRole.choices,
        default=AccountRole.FAMILY_LEADER,
    )
    is_leader = models.BooleanField(default=False)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AccountManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'accounts'
        indexes = [
            models.Index(fields=['role', 'name'], name='accounts_role_name_idx'),
        ]
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_admin(self):
        return self.role == AccountRole.ADMIN

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name
