# apps/board/models.py

import uuid

from django.db import models
from django.utils import timezone


class Task(models.Model):
    """
    Tarefa do quadro Kanban

    A posição na lista é dada por `order`, sempre relativa ao dono
    (owner_id). Valores de donos diferentes não se comparam.
    """

    CATEGORY_TODO = 'todo'
    CATEGORY_IN_PROGRESS = 'InProgress'
    CATEGORY_DONE = 'done'

    CATEGORY_CHOICES = [
        (CATEGORY_TODO, 'A fazer'),
        (CATEGORY_IN_PROGRESS, 'Em progresso'),
        (CATEGORY_DONE, 'Concluído'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=50)
    description = models.CharField(max_length=200, blank=True, default='')
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    owner_id = models.CharField(
        max_length=128,
        help_text="Identificador do usuário dono da tarefa",
        db_index=True
    )
    order = models.BigIntegerField()
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    # Campos que o update pode alterar (id, dono e criação são imutáveis)
    MUTABLE_FIELDS = ('title', 'description', 'category', 'order')

    class Meta:
        db_table = 'task'
        ordering = ['order', 'created_at', 'id']
        indexes = [
            models.Index(fields=['owner_id', 'order'], name='task_owner_order_idx'),  # listagem por dono
        ]

    def __str__(self):
        return f"{self.title} ({self.owner_id} #{self.order})"

    def to_dict(self):
        """Representação JSON usada pela API e pelo frontend"""
        return {
            'id': str(self.id),
            'title': self.title,
            'description': self.description,
            'category': self.category,
            'userId': self.owner_id,
            'order': self.order,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
