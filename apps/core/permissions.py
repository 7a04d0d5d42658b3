# apps/core/permissions.py

from functools import wraps

from django.conf import settings
from django.http import JsonResponse

from .auth_service import auth_service


def tokens_enforced():
    """Token obrigatório nas rotas de tarefas e no WebSocket?"""
    return bool(getattr(settings, 'TASKS_REQUIRE_TOKEN', False))


def token_required(view_func):
    """
    Decorador que verifica o token Bearer antes da view

    Ativo apenas com TASKS_REQUIRE_TOKEN. O payload decodificado fica
    em request.decoded. Retorna 401 em JSON ao invés de redirecionar.
    """

    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not tokens_enforced():
            return view_func(request, *args, **kwargs)

        token = auth_service.extract_bearer(request.headers.get('Authorization'))
        if not token:
            return JsonResponse({'message': 'Unauthorized. No token provided.'}, status=401)

        decoded = auth_service.verify_token(token)
        if decoded is None:
            return JsonResponse({'message': 'Forbidden. Invalid token.'}, status=401)

        request.decoded = decoded
        return view_func(request, *args, **kwargs)

    return wrapped_view
