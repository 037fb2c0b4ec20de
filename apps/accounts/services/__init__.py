"""Services for accounts business logic."""

from .exceptions import (
    LedgerServiceError,
    NotFoundError,
    InvalidInputError,
    StorageFailureError,
    AccountNotFoundError,
)
from .account_management import (
    create_family_account,
    get_account,
    list_family_accounts,
)

__all__ = [
    # Exceptions
    'LedgerServiceError',
    'NotFoundError',
    'InvalidInputError',
    'StorageFailureError',
    'AccountNotFoundError',
    # Services
    'create_family_account',
    'get_account',
    'list_family_accounts',
]
