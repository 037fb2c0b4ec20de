from django.contrib import admin

from .models import Participant
from .services import remove_participant


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    """
    Admin interface for registered participants.

    Participants are inspected here but added and edited through the API,
    so the family's ledger stays in step with their prices.
    """

    list_display = [
        'name',
        'leader_name',
        'category',
        'age',
        'days',
        'price',
        'created_at',
    ]

    list_filter = [
        'category',
        'days',
    ]

    search_fields = [
        'name',
        'leader_name',
    ]

    ordering = ['leader_name', 'created_at']

    readonly_fields = [
        'account',
        'leader_name',
        'name',
        'category',
        'age',
        'days',
        'price',
        'created_at',
        'updated_at',
    ]

    actions = ['remove_participants']

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        # Deletion goes through the remove action so the ledger is updated
        return False

    @admin.action(description='Remove selected participants (updates ledgers)')
    def remove_participants(self, request, queryset):
        count = 0
        for participant_id in queryset.values_list('id', flat=True):
            remove_participant(participant_id=participant_id)
            count += 1
        self.message_user(request, f'Removed {count} participant(s).')
