from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'accounts'

router = DefaultRouter()
router.register(r'', views.AccountViewSet, basename='account')

urlpatterns = [
    # GET    /api/accounts/        - List family accounts
    # POST   /api/accounts/        - Create family account (admin)
    # GET    /api/accounts/{id}/   - Account with ledger
    path('', include(router.urls)),
]
