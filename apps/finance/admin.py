# ==========================================
# apps/finance/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html

from .models import Ledger, LedgerStatus, Payment, PaymentStatus
from .services import reject_payment, mark_all_payments_seen


BADGE = (
    '<span style="background: {}; color: {}; padding: 3px 8px; '
    'border-radius: 10px; font-size: 11px;">{}</span>'
)


@admin.register(Ledger)
class LedgerAdmin(admin.ModelAdmin):
    """Read-only view of every family's ledger."""

    list_display = [
        'account',
        'total',
        'paid',
        'balance',
        'status_badge',
        'updated_at',
    ]

    list_filter = ['status']
    search_fields = ['account__name']
    ordering = ['account__name']

    readonly_fields = ['account', 'total', 'paid', 'balance', 'status', 'updated_at']

    def status_badge(self, obj):
        """Display ledger status as colored badge."""
        colors = {
            LedgerStatus.PENDING: ('#B85C5C', 'white'),
            LedgerStatus.PARTIAL: ('#E5C49A', '#2C1810'),
            LedgerStatus.SETTLED: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(BADGE, bg, fg, obj.get_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """
    Admin interface for payments.

    Provides:
    - Payment listing with status and receipt indicator
    - Filtering by status, source and date
    - Actions to reject payments and clear notifications
    """

    list_display = [
        'account',
        'amount',
        'date',
        'status_badge',
        'source',
        'has_receipt',
        'seen_by_admin',
        'created_at',
    ]

    list_filter = [
        'status',
        'source',
        'seen_by_admin',
        'date',
    ]

    search_fields = [
        'account__name',
        'note',
    ]

    date_hierarchy = 'date'

    readonly_fields = [
        'account',
        'amount',
        'date',
        'status',
        'source',
        'receipt_content_type',
        'receipt_filename',
        'seen_by_admin',
        'created_at',
        'updated_at',
    ]

    fields = readonly_fields + ['note']

    actions = ['reject_payments', 'mark_all_seen']

    def status_badge(self, obj):
        """Display payment status as colored badge."""
        if obj.status == PaymentStatus.REJECTED:
            return format_html(BADGE, '#B85C5C', 'white', obj.get_status_display())
        return format_html(BADGE, '#6B8E5E', 'white', obj.get_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_receipt(self, obj):
        return obj.has_receipt
    has_receipt.boolean = True
    has_receipt.short_description = 'Receipt'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description='Reject selected payments (updates ledgers)')
    def reject_payments(self, request, queryset):
        count = 0
        for payment_id in queryset.exclude(status=PaymentStatus.REJECTED).values_list('id', flat=True):
            reject_payment(payment_id=payment_id)
            count += 1
        self.message_user(request, f'Rejected {count} payment(s).')

    @admin.action(description='Mark all payments as seen')
    def mark_all_seen(self, request, queryset):
        count = mark_all_payments_seen()
        self.message_user(request, f'Cleared {count} notification(s).')

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('account')
