# apps/core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('', views.home, name='home'),

    # === USUÁRIOS E TOKENS ===
    path('api/register', views.register_user, name='register'),
    # token assinado (django.core.signing), não JWT; caminho mantido pelo frontend
    path('api/jwt', views.issue_token, name='issue_signed_token'),

    # === MONITORAMENTO ===
    path('health/', views.health_check, name='health'),
]
