from rest_framework import serializers

from apps.finance.serializers import LedgerSerializer
from .models import Participant
from .pricing import EVENT_DAYS, ParticipantCategory


# =============================================================================
# Input Serializers
# =============================================================================

class ParticipantCreateSerializer(serializers.Serializer):
    """
    Validate input for registering a participant.

    Fields:
        name (str): Participant's display name
        age (int): Age in years
        days (int): Event days attended (1-4)
        category (str): Optional; derived from age when omitted
    """

    name = serializers.CharField(max_length=150)
    age = serializers.IntegerField(min_value=0, max_value=130)
    days = serializers.ChoiceField(choices=EVENT_DAYS)
    category = serializers.ChoiceField(
        choices=ParticipantCategory.choices,
        required=False,
    )


class ParticipantUpdateSerializer(serializers.Serializer):
    """Validate a participant edit; at least one field is required."""

    name = serializers.CharField(max_length=150, required=False)
    age = serializers.IntegerField(min_value=0, max_value=130, required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('Provide a name or an age to change')
        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class ParticipantSerializer(serializers.ModelSerializer):
    category_display = serializers.CharField(source='get_category_display', read_only=True)
    is_family_leader = serializers.BooleanField(read_only=True)

    class Meta:
        model = Participant
        fields = [
            'id',
            'account',
            'leader_name',
            'name',
            'category',
            'category_display',
            'age',
            'days',
            'price',
            'is_family_leader',
            'created_at',
        ]
        read_only_fields = fields


class ParticipantChangeSerializer(serializers.Serializer):
    """A changed participant together with the family's refreshed ledger."""

    participant = ParticipantSerializer()
    ledger = LedgerSerializer()


class ParticipantRemovalSerializer(serializers.Serializer):
    """The family's ledger after a participant was removed."""

    ledger = LedgerSerializer()
