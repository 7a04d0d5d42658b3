# apps/board/store.py

"""
Task Store - persistência das tarefas sobre o ORM do Django

Contrato:
- insert / update_by_id validam com full_clean() antes de gravar
- update_by_id só altera os campos recebidos (order omitido é preservado)
- delete_by_id de id ausente é no-op e retorna False
- qualquer DatabaseError vira StoreError

Concorrência: não há lock por dono. O update trava apenas a linha
(select_for_update) durante o read-merge-write.
"""

import logging
import uuid
from typing import Dict, List, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction
from django.db.models import Max

from .exceptions import NotFoundError, StoreError, ValidationError
from .models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """Coleção persistente de tarefas, consultável por dono e ordenável"""

    _INSERT_FIELDS = ('title', 'description', 'category', 'owner_id', 'order')

    def insert(self, fields: Dict) -> Task:
        """Grava uma nova tarefa. Levanta ValidationError se inválida."""
        task = Task(**{name: value for name, value in fields.items() if name in self._INSERT_FIELDS})

        try:
            with transaction.atomic():
                self._validate(task)
                task.save(force_insert=True)
        except DatabaseError as exc:
            logger.error(f"❌ Falha ao inserir tarefa de {task.owner_id}: {exc}")
            raise StoreError(str(exc)) from exc

        return task

    def find_by_owner(self, owner_id: str) -> List[Task]:
        """Tarefas do dono, sem garantia de ordem"""
        try:
            return list(Task.objects.filter(owner_id=owner_id).order_by())
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc

    def find_top_order(self, owner_id: str) -> Optional[int]:
        """Maior `order` do dono, ou None se ele não tem tarefas"""
        try:
            return Task.objects.filter(owner_id=owner_id).aggregate(top=Max('order'))['top']
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc

    def update_by_id(self, task_id, fields: Dict) -> Task:
        """
        Mescla os campos recebidos no registro existente

        Campos imutáveis ou desconhecidos são ignorados. Levanta
        NotFoundError se o id não existir.
        """
        pk = self._parse_id(task_id)
        if pk is None:
            raise NotFoundError()

        try:
            with transaction.atomic():
                try:
                    task = Task.objects.select_for_update().get(pk=pk)
                except Task.DoesNotExist:
                    raise NotFoundError()

                changed = []
                for name, value in fields.items():
                    if name not in Task.MUTABLE_FIELDS:
                        continue
                    setattr(task, name, value)
                    changed.append(name)

                self._validate(task)
                if changed:
                    task.save(update_fields=changed)

        except DatabaseError as exc:
            logger.error(f"❌ Falha ao atualizar tarefa {task_id}: {exc}")
            raise StoreError(str(exc)) from exc

        return task

    def delete_by_id(self, task_id) -> bool:
        """Remove a tarefa. Retorna False se nada foi removido."""
        pk = self._parse_id(task_id)
        if pk is None:
            return False

        try:
            with transaction.atomic():
                deleted, _ = Task.objects.filter(pk=pk).delete()
        except DatabaseError as exc:
            logger.error(f"❌ Falha ao remover tarefa {task_id}: {exc}")
            raise StoreError(str(exc)) from exc

        return deleted > 0

    def list_by_owner_ordered(self, owner_id: str) -> List[Task]:
        """Tarefas do dono em ordem crescente de `order` (empate: criação, id)"""
        try:
            return list(
                Task.objects.filter(owner_id=owner_id).order_by('order', 'created_at', 'id')
            )
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc

    # =================== MÉTODOS PRIVADOS ===================

    @staticmethod
    def _parse_id(task_id) -> Optional[uuid.UUID]:
        if isinstance(task_id, uuid.UUID):
            return task_id
        try:
            return uuid.UUID(str(task_id))
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _validate(task: Task) -> None:
        try:
            task.full_clean()
        except DjangoValidationError as exc:
            errors = {field: [str(m) for m in messages] for field, messages in exc.message_dict.items()}
            resumo = '; '.join(f"{field}: {' '.join(messages)}" for field, messages in errors.items())
            raise ValidationError(resumo, errors=errors) from exc
