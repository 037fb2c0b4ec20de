from rest_framework import serializers

from apps.finance.serializers import LedgerSerializer
from .models import Account


class AccountSerializer(serializers.ModelSerializer):
    """Family account with its ledger figures."""

    ledger = LedgerSerializer(read_only=True)

    class Meta:
        model = Account
        fields = [
            'id',
            'name',
            'email',
            'role',
            'is_leader',
            'ledger',
            'created_at',
        ]
        read_only_fields = fields


class AccountListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the family picker."""

    class Meta:
        model = Account
        fields = ['id', 'name', 'is_leader']
        read_only_fields = fields


class AccountCreateSerializer(serializers.Serializer):
    """Validate input for creating a family account."""

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name must not be blank')
        return value
