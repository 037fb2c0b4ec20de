# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from apps.finance.models import Ledger
from .models import Account, AccountRole


BADGE = (
    '<span style="background: {}; color: {}; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


class LedgerInline(admin.StackedInline):
    """Read-only ledger figures on the account page."""
    model = Ledger
    can_delete = False
    extra = 0
    fields = ['total', 'paid', 'balance', 'status', 'updated_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        """Ledgers are created with the account by the service."""
        return False


@admin.register(Account)
class AccountAdmin(BaseUserAdmin):
    """
    Admin interface for family accounts and the event administrator.

    Ledger figures are shown read-only; they only change through the
    participant and payment services.
    """

    list_display = [
        'name',
        'email',
        'role_badge',
        'is_leader',
        'get_status',
        'get_balance',
        'created_at',
    ]

    list_filter = [
        'role',
        'is_leader',
        'is_active',
        'ledger__status',
    ]

    search_fields = [
        'name',
        'email',
    ]

    ordering = ['name']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'email', 'password')
        }),
        ('Role', {
            'fields': ('role', 'is_leader'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create Administrator', {
            'classes': ('wide',),
            'fields': ('name', 'email', 'password1', 'password2', 'role'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = []
    inlines = [LedgerInline]

    def role_badge(self, obj):
        """Display role as colored badge."""
        if obj.role == AccountRole.ADMIN:
            return format_html(BADGE, '#A47449', 'white', 'Admin')
        return format_html(BADGE, '#6B8E5E', 'white', 'Family')
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def get_status(self, obj):
        ledger = getattr(obj, 'ledger', None)
        return ledger.get_status_display() if ledger else '-'
    get_status.short_description = 'Status'
    get_status.admin_order_field = 'ledger__status'

    def get_balance(self, obj):
        ledger = getattr(obj, 'ledger', None)
        return ledger.balance if ledger else '-'
    get_balance.short_description = 'Balance'
    get_balance.admin_order_field = 'ledger__balance'

    actions = ['check_ledgers']

    @admin.action(description='Check ledgers against participants and payments')
    def check_ledgers(self, request, queryset):
        """Rebuild the selected ledgers in memory and report any drift."""
        from apps.finance.services import rebuild_ledger

        drifted = []
        checked = 0
        for account in queryset.filter(ledger__isnull=False).select_related('ledger'):
            rebuilt = rebuild_ledger(account_id=account.pk)
            ledger = account.ledger
            if (ledger.total, ledger.paid, ledger.balance) != (
                rebuilt.total, rebuilt.paid, rebuilt.balance
            ):
                drifted.append(account.name)
            checked += 1

        msg = f'Checked {checked} ledger(s).'
        if drifted:
            msg += f' Drift found for: {", ".join(drifted)}.'
        self.message_user(request, msg)

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('ledger')
