from django.urls import path
from . import views

app_name = 'finance'

urlpatterns = [
    # Family ledger and payments
    path('accounts/<int:account_id>/ledger/', views.account_ledger, name='account-ledger'),
    path('accounts/<int:account_id>/ledger/check/', views.ledger_check, name='ledger-check'),
    path('accounts/<int:account_id>/payments/', views.account_payments, name='account-payments'),
    path('accounts/<int:account_id>/payments/scan/', views.scan_receipt, name='scan-receipt'),

    # Single payment
    path('payments/<int:pk>/', views.payment_detail, name='payment-detail'),
    path('payments/<int:pk>/reject/', views.payment_reject, name='payment-reject'),
    path('payments/<int:pk>/receipt/', views.payment_receipt, name='payment-receipt'),
    path('payments/<int:pk>/seen/', views.payment_seen, name='payment-seen'),

    # Administrator dashboard
    path('admin/stats/', views.event_stats, name='event-stats'),
    path('admin/families/', views.families_overview, name='families-overview'),
    path('admin/notifications/', views.notifications, name='notifications'),
    path('admin/notifications/clear/', views.notifications_clear, name='notifications-clear'),
    path('admin/participants/export/', views.export_participants, name='export-participants'),
]
