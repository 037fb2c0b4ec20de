from django.http import HttpResponse
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from drf_spectacular.types import OpenApiTypes

from apps.accounts.errors import service_error_response
from apps.accounts.permissions import IsEventAdmin, IsEventAdminOrReadOnly
from .models import PaymentSource
from .serializers import (
    PaymentCreateSerializer,
    ReceiptScanInputSerializer,
    LedgerSerializer,
    PaymentSerializer,
    LedgerCheckSerializer,
    ScannedPaymentSerializer,
    EventStatsSerializer,
    FamilyOverviewSerializer,
    NotificationsSerializer,
    ErrorSerializer,
)
from .services import (
    LedgerServiceError,
    ReceiptScanError,
    ReceiptScannerNotConfiguredError,
    ReceiptScanner,
    EventStatistics,
    record_payment,
    reject_payment,
    delete_payment,
    rebuild_ledger,
    get_ledger,
    get_payment,
    list_payments,
    unseen_payments,
    mark_payment_seen,
    mark_all_payments_seen,
)


# =============================================================================
# Family ledger and payments
# =============================================================================

@extend_schema(
    responses={200: LedgerSerializer, 404: ErrorSerializer},
    description="Current ledger figures of a family.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def account_ledger(request, account_id):
    """Get a family's ledger - thin HTTP handler."""
    try:
        ledger = get_ledger(account_id=account_id)
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response(LedgerSerializer(ledger).data)


@extend_schema(
    responses={200: LedgerCheckSerializer, 404: ErrorSerializer},
    description="Compare the stored ledger with one rebuilt from participants and payments.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([IsEventAdmin])
def ledger_check(request, account_id):
    """Consistency check of one family's ledger - thin HTTP handler."""
    try:
        ledger = get_ledger(account_id=account_id)
        rebuilt = rebuild_ledger(account_id=account_id)
    except LedgerServiceError as e:
        return service_error_response(e)

    consistent = (
        ledger.total == rebuilt.total
        and ledger.paid == rebuilt.paid
        and ledger.balance == rebuilt.balance
        and ledger.status == rebuilt.status
    )
    return Response({
        'stored': LedgerSerializer(ledger).data,
        'rebuilt': {
            'total': str(rebuilt.total),
            'paid': str(rebuilt.paid),
            'balance': str(rebuilt.balance),
            'status': rebuilt.status,
        },
        'consistent': consistent,
    })


@extend_schema(
    methods=['GET'],
    responses={200: PaymentSerializer(many=True), 404: ErrorSerializer},
    description="A family's payments, newest first.",
    tags=['finance'],
)
@extend_schema(
    methods=['POST'],
    request=PaymentCreateSerializer,
    responses={201: PaymentSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Record a payment. Send multipart/form-data to attach a receipt.",
    tags=['finance'],
)
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
@parser_classes([JSONParser, MultiPartParser, FormParser])
def account_payments(request, account_id):
    """List or record a family's payments - thin HTTP handler."""
    if request.method == 'GET':
        try:
            payments = list_payments(account_id=account_id)
        except LedgerServiceError as e:
            return service_error_response(e)
        return Response(PaymentSerializer(payments, many=True).data)

    serializer = PaymentCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    receipt = data.get('receipt')
    try:
        payment = record_payment(
            account_id=account_id,
            amount=data['amount'],
            date=data['date'],
            note=data.get('note', ''),
            receipt=receipt.read() if receipt else None,
            receipt_content_type=receipt.content_type if receipt else '',
            receipt_filename=receipt.name if receipt else '',
        )
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=ReceiptScanInputSerializer,
    responses={
        201: ScannedPaymentSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
        502: ErrorSerializer,
        503: ErrorSerializer,
    },
    description=(
        "Read amount and date from a receipt image and record the payment "
        "with the receipt attached."
    ),
    tags=['finance'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
@parser_classes([MultiPartParser, FormParser])
def scan_receipt(request, account_id):
    """Scan a receipt and record its payment - thin HTTP handler."""
    serializer = ReceiptScanInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    receipt = serializer.validated_data['receipt']

    try:
        # Fail on an unknown family before calling the scanner
        get_ledger(account_id=account_id)
        image = receipt.read()
        scanned = ReceiptScanner.from_settings().extract(image, receipt.content_type)
        payment = record_payment(
            account_id=account_id,
            amount=scanned.amount,
            date=scanned.date,
            receipt=image,
            receipt_content_type=receipt.content_type,
            receipt_filename=receipt.name,
            source=PaymentSource.RECEIPT_SCAN,
            note=serializer.validated_data.get('note', ''),
        )
        ledger = get_ledger(account_id=account_id)
    except ReceiptScannerNotConfiguredError as e:
        return Response({'error': str(e)}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    except ReceiptScanError as e:
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response({
        'payment': PaymentSerializer(payment).data,
        'payer_name': scanned.payer_name,
        'ledger': LedgerSerializer(ledger).data,
    }, status=status.HTTP_201_CREATED)


# =============================================================================
# Single payment
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: PaymentSerializer, 404: ErrorSerializer},
    tags=['finance'],
)
@extend_schema(
    methods=['DELETE'],
    responses={204: None, 404: ErrorSerializer},
    description="Delete a payment permanently (admin only).",
    tags=['finance'],
)
@api_view(['GET', 'DELETE'])
@permission_classes([IsEventAdminOrReadOnly])
def payment_detail(request, pk):
    """Get or delete a payment - thin HTTP handler."""
    try:
        if request.method == 'DELETE':
            delete_payment(payment_id=pk)
            return Response(status=status.HTTP_204_NO_CONTENT)
        payment = get_payment(payment_id=pk)
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response(PaymentSerializer(payment).data)


@extend_schema(
    request=None,
    responses={200: PaymentSerializer, 404: ErrorSerializer},
    description="Reject a payment; its amount no longer counts as paid.",
    tags=['finance'],
)
@api_view(['POST'])
@permission_classes([IsEventAdmin])
def payment_reject(request, pk):
    """Reject a payment - thin HTTP handler."""
    try:
        payment = reject_payment(payment_id=pk)
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response(PaymentSerializer(payment).data)


@extend_schema(
    responses={(200, 'application/octet-stream'): OpenApiTypes.BINARY, 404: ErrorSerializer},
    description="Download the receipt attached to a payment.",
    tags=['finance'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def payment_receipt(request, pk):
    """Stream the stored receipt blob - thin HTTP handler."""
    try:
        payment = get_payment(payment_id=pk)
    except LedgerServiceError as e:
        return service_error_response(e)

    if not payment.has_receipt:
        return Response(
            {'error': 'Payment has no receipt attached'},
            status=status.HTTP_404_NOT_FOUND,
        )

    response = HttpResponse(
        bytes(payment.receipt),
        content_type=payment.receipt_content_type or 'application/octet-stream',
    )
    filename = payment.receipt_filename or f'receipt-{payment.pk}'
    response['Content-Disposition'] = f'inline; filename="{filename}"'
    return response


@extend_schema(
    request=None,
    responses={200: PaymentSerializer, 404: ErrorSerializer},
    description="Clear the notification badge of a payment.",
    tags=['admin'],
)
@api_view(['POST'])
@permission_classes([IsEventAdmin])
def payment_seen(request, pk):
    """Mark a payment as seen - thin HTTP handler."""
    try:
        payment = mark_payment_seen(payment_id=pk)
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response(PaymentSerializer(payment).data)


# =============================================================================
# Administrator dashboard
# =============================================================================

@extend_schema(
    responses={200: EventStatsSerializer},
    description="Money collected and pending, occupied spots and ledgers per status.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsEventAdmin])
def event_stats(request):
    """Dashboard totals - thin HTTP handler."""
    data = EventStatistics.event_stats()
    return Response(EventStatsSerializer(data).data)


@extend_schema(
    responses={200: FamilyOverviewSerializer(many=True)},
    description="Every family with its ledger, participants and payments.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsEventAdmin])
def families_overview(request):
    """All families for the admin dashboard - thin HTTP handler."""
    families = EventStatistics.families_overview()
    return Response(FamilyOverviewSerializer(families, many=True).data)


@extend_schema(
    responses={200: NotificationsSerializer},
    description="Payments the administrator has not seen yet.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsEventAdmin])
def notifications(request):
    """Unseen payments - thin HTTP handler."""
    payments = list(unseen_payments())
    return Response({
        'count': len(payments),
        'payments': PaymentSerializer(payments, many=True).data,
    })


@extend_schema(
    request=None,
    responses={200: OpenApiTypes.OBJECT},
    description="Mark every payment as seen.",
    tags=['admin'],
)
@api_view(['POST'])
@permission_classes([IsEventAdmin])
def notifications_clear(request):
    """Clear all notification badges - thin HTTP handler."""
    cleared = mark_all_payments_seen()
    return Response({'cleared': cleared})


@extend_schema(
    responses={(200, 'text/csv'): OpenApiTypes.STR},
    description="Download every participant with their family's ledger as CSV.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsEventAdmin])
def export_participants(request):
    """CSV export of all participants - thin HTTP handler."""
    filename = f"participants-{timezone.localdate():%Y-%m-%d}.csv"
    response = HttpResponse(content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    EventStatistics.export_participants_csv(response)
    return response
