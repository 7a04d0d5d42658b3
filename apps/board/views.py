# apps/board/views.py

import json
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.permissions import token_required
from .exceptions import StoreError, TaskError, ValidationError
from .services import TaskService

# Serviço compartilhado (store do ORM + channel layer configurado)
task_service = TaskService()


def handle_task_errors(store_error_status=None):
    """
    Decorador que traduz erros de tarefa em JsonResponse

    store_error_status permite que create/update devolvam 400 em falha
    do backend, como o frontend espera.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapped_view(request, *args, **kwargs):
            try:
                return view_func(request, *args, **kwargs)
            except StoreError as exc:
                return _error_response(exc, status=store_error_status or exc.status_code)
            except TaskError as exc:
                return _error_response(exc)

        return wrapped_view

    return decorator


@csrf_exempt  # API JSON consumida pelo SPA
@require_POST
@token_required
@handle_task_errors(store_error_status=400)
def add_task(request):
    """
    Cria tarefa no fim da lista do usuário
    """
    task = task_service.create(_json_body(request))
    return JsonResponse(task.to_dict(), status=201)


@require_GET
@token_required
@handle_task_errors()
def list_tasks(request):
    """
    Lista tarefas do usuário em ordem crescente de `order`
    """
    owner_id = request.GET.get('userId') or request.GET.get('ownerId')
    tasks = task_service.list(owner_id)
    return JsonResponse([task.to_dict() for task in tasks], safe=False)


@csrf_exempt
@require_http_methods(['PUT', 'PATCH', 'DELETE'])
@token_required
def task_detail(request, task_id):
    """
    PUT/PATCH atualiza parcialmente, DELETE remove
    """
    if request.method == 'DELETE':
        return _delete_task(request, task_id)
    return _update_task(request, task_id)


@handle_task_errors(store_error_status=400)
def _update_task(request, task_id):
    task = task_service.update(task_id, _json_body(request))
    return JsonResponse(task.to_dict())


@handle_task_errors()
def _delete_task(request, task_id):
    # Id inexistente também responde 200 (remoção idempotente)
    task_service.delete(task_id)
    return JsonResponse({'message': 'Task deleted'})


# === Métodos auxiliares ===

def _json_body(request):
    if not request.body:
        return {}
    try:
        return json.loads(request.body)
    except ValueError:
        raise ValidationError('Invalid JSON body')


def _error_response(exc, status=None):
    body = {'error': exc.message}
    if getattr(exc, 'errors', None):
        body['fields'] = exc.errors
    return JsonResponse(body, status=status or exc.status_code)
