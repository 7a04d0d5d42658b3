# apps/board/exceptions.py

"""
Erros da coleção de tarefas

Cada erro carrega a mensagem devolvida ao cliente e o status HTTP
correspondente. As views traduzem direto para JsonResponse.
"""

from typing import Dict, List, Optional


class TaskError(Exception):
    """Base dos erros de tarefas"""

    status_code = 500
    default_message = 'Erro ao processar tarefa'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskError):
    """Entrada ausente ou malformada - corrigível pelo usuário"""

    status_code = 400
    default_message = 'Invalid task data'

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, List[str]]] = None):
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(TaskError):
    """Operação aponta para um id inexistente"""

    status_code = 404
    default_message = 'Task not found'


class StoreError(TaskError):
    """Falha do backend de persistência"""

    status_code = 500
    default_message = 'Task store unavailable'
