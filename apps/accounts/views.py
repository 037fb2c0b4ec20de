from rest_framework import viewsets, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .errors import service_error_response
from .permissions import IsEventAdmin
from .serializers import (
    AccountSerializer,
    AccountListSerializer,
    AccountCreateSerializer,
)
from .services import (
    LedgerServiceError,
    create_family_account,
    list_family_accounts,
)


class AccountViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for family accounts.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get all family accounts
    retrieve: Get one account with its ledger
    create: Create a family account and its ledger (admin only)
    """

    serializer_class = AccountSerializer
    permission_classes = [AllowAny]

    def get_queryset(self):
        return list_family_accounts()

    def get_serializer_class(self):
        if self.action == 'list':
            return AccountListSerializer
        if self.action == 'create':
            return AccountCreateSerializer
        return AccountSerializer

    def get_permissions(self):
        if self.action == 'create':
            return [IsEventAdmin()]
        return [AllowAny()]

    @extend_schema(request=AccountCreateSerializer, responses={201: AccountSerializer})
    def create(self, request, *args, **kwargs):
        """Create a family account."""
        serializer = AccountCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            account = create_family_account(
                name=serializer.validated_data['name'],
                email=serializer.validated_data.get('email') or None,
            )
        except LedgerServiceError as e:
            return service_error_response(e)

        return Response(AccountSerializer(account).data, status=status.HTTP_201_CREATED)
