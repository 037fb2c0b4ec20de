"""
Custom permission classes for the event API.

Family-leader endpoints are open; anything that changes another family's
money or reads every family's data requires the event administrator.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

from .models import AccountRole


class IsEventAdmin(BasePermission):
    """
    Allows access only to an authenticated account with role=admin.

    Usage:
        @permission_classes([IsEventAdmin])
        def event_stats(request):
            ...
    """

    message = 'Only the event administrator can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, 'role', None) == AccountRole.ADMIN
        )


class IsEventAdminOrReadOnly(IsEventAdmin):
    """Read access for everyone; writes require the event administrator."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return super().has_permission(request, view)
