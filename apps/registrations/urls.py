from django.urls import path
from . import views

app_name = 'registrations'

urlpatterns = [
    path(
        'accounts/<int:account_id>/participants/',
        views.account_participants,
        name='account-participants',
    ),
    path('participants/<int:pk>/', views.participant_detail, name='participant-detail'),
]
