# apps/core/views.py

import json
import logging

from django.conf import settings
from django.core.cache import cache
from django.http import HttpResponse, JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps import __version__
from .auth_service import auth_service
from .models import UserInfo

logger = logging.getLogger(__name__)


@require_GET
def home(request):
    """Sinal de vida simples"""
    return HttpResponse('Server is running', content_type='text/plain')


@require_GET
def health_check(request):
    """
    Health check para monitoramento
    """
    try:
        # Verificar conexão com banco
        UserInfo.objects.exists()

        # Verificar cache (Redis em produção)
        cache.set('health_check', 'ok', 60)
        cache.get('health_check')

        status = {
            'status': 'healthy',
            'database': 'ok',
            'cache': 'ok',
            'timestamp': timezone.now().isoformat(),
            'version': __version__
        }

        return JsonResponse(status)

    except Exception as e:
        logger.error(f"❌ Health check falhou: {str(e)}")
        status = {
            'status': 'unhealthy',
            'error': str(e),
            'timestamp': timezone.now().isoformat(),
            'version': __version__
        }

        return JsonResponse(status, status=500)


@csrf_exempt
@require_POST
def register_user(request):
    """
    Cadastro do usuário após login no provedor de identidade
    """
    try:
        dados = json.loads(request.body or b'{}')
    except json.JSONDecodeError:
        return JsonResponse({'message': 'Invalid JSON body.'}, status=400)

    if not isinstance(dados, dict):
        return JsonResponse({'message': 'Invalid JSON body.'}, status=400)

    try:
        sucesso, mensagem, usuario = auth_service.register_user(dados)
    except Exception:
        logger.exception("❌ Erro ao registrar usuário")
        return JsonResponse({'message': 'Internal server error.'}, status=500)

    if not sucesso:
        return JsonResponse({'message': mensagem}, status=400)

    return JsonResponse({'message': mensagem, 'user': usuario.to_dict()})


@csrf_exempt
@require_POST
def issue_token(request):
    """
    Emite token de acesso (validade de 1 dia) e grava em cookie httpOnly

    Apesar do caminho /api/jwt, o token não é um JWT: é um valor
    opaco de django.core.signing. O cliente não deve decodificá-lo, só
    reenviá-lo em `Authorization: Bearer` ou `?token=` no WebSocket.
    """
    try:
        payload = json.loads(request.body or b'{}')
    except json.JSONDecodeError:
        return JsonResponse({'message': 'Invalid JSON body.'}, status=400)

    if not isinstance(payload, dict):
        return JsonResponse({'message': 'Invalid JSON body.'}, status=400)

    token = auth_service.issue_token(payload)

    response = JsonResponse({'success': True, 'token': token})
    response.set_cookie(
        'token',
        token,
        max_age=settings.ACCESS_TOKEN_MAX_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite='Strict' if settings.DEBUG else 'None',
    )
    return response
