from django.conf import settings
from django.urls import reverse
from rest_framework import serializers

from .models import Ledger, Payment


# =============================================================================
# Input Serializers
# =============================================================================

def _validate_receipt_file(value):
    if value.size > settings.RECEIPT_MAX_BYTES:
        raise serializers.ValidationError(
            f'Receipt is larger than {settings.RECEIPT_MAX_BYTES} bytes'
        )
    content_type = getattr(value, 'content_type', '') or ''
    if content_type and not (
        content_type.startswith('image/') or content_type == 'application/pdf'
    ):
        raise serializers.ValidationError('Receipt must be an image or a PDF')
    return value


class PaymentCreateSerializer(serializers.Serializer):
    """
    Validate input for recording a payment.

    Fields:
        amount (Decimal): Payment amount, negative for a manual reversal
        date (date): Date the payment was made
        note (str): Optional note
        receipt (file): Optional receipt image (multipart only)
    """

    amount = serializers.DecimalField(max_digits=10, decimal_places=2)
    date = serializers.DateField()
    note = serializers.CharField(max_length=500, required=False, allow_blank=True)
    receipt = serializers.FileField(required=False, allow_empty_file=False)

    def validate_amount(self, value):
        if value == 0:
            raise serializers.ValidationError('Amount must not be zero')
        return value

    def validate_receipt(self, value):
        return _validate_receipt_file(value)


class ReceiptScanInputSerializer(serializers.Serializer):
    """Validate the uploaded receipt of a scan-and-record request."""

    receipt = serializers.FileField(allow_empty_file=False)
    note = serializers.CharField(max_length=500, required=False, allow_blank=True)

    def validate_receipt(self, value):
        return _validate_receipt_file(value)


# =============================================================================
# Output Serializers
# =============================================================================

class LedgerSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Ledger
        fields = [
            'total',
            'paid',
            'balance',
            'status',
            'status_display',
            'updated_at',
        ]
        read_only_fields = fields


class PaymentSerializer(serializers.ModelSerializer):
    """Payment without the receipt blob; ``receipt_url`` links to it."""

    account_name = serializers.CharField(source='account.name', read_only=True)
    has_receipt = serializers.BooleanField(read_only=True)
    receipt_url = serializers.SerializerMethodField()

    class Meta:
        model = Payment
        fields = [
            'id',
            'account',
            'account_name',
            'amount',
            'date',
            'status',
            'source',
            'note',
            'has_receipt',
            'receipt_url',
            'seen_by_admin',
            'created_at',
        ]
        read_only_fields = fields

    def get_receipt_url(self, obj):
        if not obj.has_receipt:
            return None
        return reverse('finance:payment-receipt', kwargs={'pk': obj.pk})


class LedgerCheckSerializer(serializers.Serializer):
    """Stored ledger figures next to the figures rebuilt from scratch."""

    stored = LedgerSerializer()
    rebuilt = serializers.DictField()
    consistent = serializers.BooleanField()


class ScannedPaymentSerializer(serializers.Serializer):
    """Result of scanning a receipt and recording the payment."""

    payment = PaymentSerializer()
    payer_name = serializers.CharField(allow_null=True)
    ledger = LedgerSerializer()


class StatusCountsSerializer(serializers.Serializer):
    pending = serializers.IntegerField()
    partial = serializers.IntegerField()
    settled = serializers.IntegerField()


class EventStatsSerializer(serializers.Serializer):
    total_collected = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_pending = serializers.DecimalField(max_digits=12, decimal_places=2)
    occupied_spots = serializers.IntegerField()
    total_spots = serializers.IntegerField()
    families = serializers.IntegerField()
    status_counts = StatusCountsSerializer()


class FamilyParticipantSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    age = serializers.IntegerField()
    days = serializers.IntegerField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class FamilyOverviewSerializer(serializers.Serializer):
    """One family with its ledger, members and payments (admin view)."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    ledger = LedgerSerializer()
    participants = FamilyParticipantSerializer(many=True, source='participants.all')
    payments = PaymentSerializer(many=True, source='payments.all')


class NotificationsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    payments = PaymentSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
