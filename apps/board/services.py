# apps/board/services.py

"""
Serviço de mutação de tarefas

Cada operação corresponde a uma ação do usuário no quadro. Toda
mutação bem-sucedida agenda exatamente uma notificação com
transaction.on_commit: o sinal só sai depois do commit e é descartado
se a transação for revertida.
"""

import logging
from typing import Dict, List

from django.db import transaction

from .exceptions import ValidationError
from .models import Task
from .notifications import ChangeNotificationBus
from .ordering import OrderAssignmentPolicy
from .store import TaskStore

logger = logging.getLogger(__name__)

# Nome no JSON -> campo do model (apenas campos mutáveis)
UPDATABLE_FIELDS = {
    'title': 'title',
    'description': 'description',
    'category': 'category',
    'order': 'order',
}


class TaskService:
    """
    Create / list / update / delete sobre o TaskStore

    Dependências injetáveis para testes; por padrão usa o ORM e o
    channel layer configurado.
    """

    def __init__(self, store=None, policy=None, bus=None):
        self.store = store or TaskStore()
        self.policy = policy or OrderAssignmentPolicy(self.store)
        self.bus = bus or ChangeNotificationBus()

    def create(self, data: Dict) -> Task:
        """
        Cria tarefa no fim da lista do dono

        Aceita `userId` (ou `ownerId`). Um `order` enviado pelo cliente
        é ignorado - quem decide é a política.
        """
        data = self._require_mapping(data)

        title = data.get('title')
        category = data.get('category')
        owner_id = data.get('userId') or data.get('ownerId')

        if not title or not category or not owner_id:
            raise ValidationError('Title, category, and userId are required')

        description = data.get('description')
        if description is None:
            description = ''
        self._require_text({
            'title': title,
            'description': description,
            'category': category,
            'userId': owner_id,
        })

        fields = {
            'title': title,
            'description': description,
            'category': category,
            'owner_id': owner_id,
            'order': self.policy.next_order(owner_id),
        }

        task = self.store.insert(fields)
        self._notify_on_commit()

        logger.info(f"✅ Tarefa criada {task.id} ({owner_id} #{task.order})")
        return task

    def list(self, owner_id) -> List[Task]:
        """Tarefas do dono em ordem crescente de `order`"""
        if not owner_id:
            raise ValidationError('userId is required')

        return self.store.list_by_owner_ordered(str(owner_id))

    def update(self, task_id, data: Dict) -> Task:
        """
        Atualização parcial

        Só title, description, category e order são aplicados; id, dono
        e data de criação enviados no corpo são ignorados.
        """
        data = self._require_mapping(data)

        fields = {
            model_field: data[wire_field]
            for wire_field, model_field in UPDATABLE_FIELDS.items()
            if wire_field in data
        }
        if 'description' in fields and fields['description'] is None:
            fields['description'] = ''
        self._require_text({
            name: value for name, value in fields.items()
            if name != 'order' and value is not None
        })

        fields = self.policy.fields_for_update(fields)

        task = self.store.update_by_id(task_id, fields)
        self._notify_on_commit()

        logger.info(f"✏️ Tarefa atualizada {task.id} campos={sorted(fields)}")
        return task

    def delete(self, task_id) -> bool:
        """
        Remove a tarefa

        Id ausente é no-op: retorna False e não notifica, já que nada mudou.
        """
        removed = self.store.delete_by_id(task_id)

        if removed:
            self._notify_on_commit()
            logger.info(f"🗑️ Tarefa removida {task_id}")
        else:
            logger.debug(f"Tarefa {task_id} não existe - nada a remover")

        return removed

    # =================== MÉTODOS PRIVADOS ===================

    def _notify_on_commit(self):
        transaction.on_commit(self.bus.publish)

    @staticmethod
    def _require_text(values: Dict):
        """Campos de texto precisam chegar como string no JSON"""
        errors = {
            name: ['must be a string']
            for name, value in values.items()
            if not isinstance(value, str)
        }
        if errors:
            raise ValidationError(
                f"{', '.join(sorted(errors))} must be a string",
                errors=errors,
            )

    @staticmethod
    def _require_mapping(data) -> Dict:
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object')
        return data
