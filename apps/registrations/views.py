from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.errors import service_error_response
from apps.finance.serializers import ErrorSerializer, LedgerSerializer
from apps.finance.services import get_ledger
from .serializers import (
    ParticipantSerializer,
    ParticipantCreateSerializer,
    ParticipantUpdateSerializer,
    ParticipantChangeSerializer,
    ParticipantRemovalSerializer,
)
from .services import (
    LedgerServiceError,
    add_participant,
    edit_participant,
    remove_participant,
    list_participants,
    get_participant,
)


def _with_ledger(participant_data, account_id):
    """Attach the family's refreshed ledger to a participant response."""
    ledger = get_ledger(account_id=account_id)
    return {
        'participant': participant_data,
        'ledger': LedgerSerializer(ledger).data,
    }


@extend_schema(
    methods=['GET'],
    responses={200: ParticipantSerializer(many=True), 404: ErrorSerializer},
    description="A family's participants in registration order.",
    tags=['registrations'],
)
@extend_schema(
    methods=['POST'],
    request=ParticipantCreateSerializer,
    responses={201: ParticipantChangeSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Register a participant; their price is added to the family's ledger.",
    tags=['registrations'],
)
@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def account_participants(request, account_id):
    """List or add a family's participants - thin HTTP handler."""
    if request.method == 'GET':
        try:
            participants = list_participants(account_id=account_id)
        except LedgerServiceError as e:
            return service_error_response(e)
        return Response(ParticipantSerializer(participants, many=True).data)

    serializer = ParticipantCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        participant = add_participant(
            account_id=account_id,
            name=data['name'],
            age=data['age'],
            days=data['days'],
            category=data.get('category'),
        )
        body = _with_ledger(ParticipantSerializer(participant).data, account_id)
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response(body, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['GET'],
    responses={200: ParticipantSerializer, 404: ErrorSerializer},
    tags=['registrations'],
)
@extend_schema(
    methods=['PATCH'],
    request=ParticipantUpdateSerializer,
    responses={200: ParticipantChangeSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    description="Rename a participant or change their age (reprices them).",
    tags=['registrations'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: ParticipantRemovalSerializer, 404: ErrorSerializer},
    description="Remove a participant; their price is taken off the family's ledger.",
    tags=['registrations'],
)
@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([AllowAny])
def participant_detail(request, pk):
    """Get, edit or remove a participant - thin HTTP handler."""
    try:
        participant = get_participant(participant_id=pk)
    except LedgerServiceError as e:
        return service_error_response(e)

    account_id = participant.account_id

    if request.method == 'GET':
        return Response(ParticipantSerializer(participant).data)

    if request.method == 'DELETE':
        try:
            remove_participant(participant_id=pk)
            ledger = get_ledger(account_id=account_id)
        except LedgerServiceError as e:
            return service_error_response(e)
        return Response(ParticipantRemovalSerializer({'ledger': ledger}).data)

    serializer = ParticipantUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        participant = edit_participant(
            participant_id=pk,
            name=serializer.validated_data.get('name'),
            age=serializer.validated_data.get('age'),
        )
        body = _with_ledger(ParticipantSerializer(participant).data, account_id)
    except LedgerServiceError as e:
        return service_error_response(e)

    return Response(body)
