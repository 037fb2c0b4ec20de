"""
Registrations app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    LedgerServiceError,
    NotFoundError,
    InvalidInputError,
    StorageFailureError,
    AccountNotFoundError,
    ParticipantNotFoundError,
)

from .participant_management import (
    add_participant,
    edit_participant,
    remove_participant,
    list_participants,
    get_participant,
)


__all__ = [
    # Exceptions
    'LedgerServiceError',
    'NotFoundError',
    'InvalidInputError',
    'StorageFailureError',
    'AccountNotFoundError',
    'ParticipantNotFoundError',

    # Participant Management
    'add_participant',
    'edit_participant',
    'remove_participant',
    'list_participants',
    'get_participant',
]
