# apps/core/models.py

from django.db import models
from django.utils import timezone

DEFAULT_PHOTO_URL = 'https://randomuser.me/api/portraits/men/1.jpg'


class UserInfo(models.Model):
    """
    Cadastro do usuário vindo do frontend

    A autenticação em si acontece fora (provedor de identidade); aqui
    guardamos apenas o perfil. As tarefas referenciam `user_id`.
    """

    user_id = models.CharField(max_length=128, db_index=True)
    email = models.EmailField(unique=True)
    display_name = models.CharField(max_length=200, blank=True, default='Unknown User')
    photo_url = models.URLField(max_length=500, blank=True, default=DEFAULT_PHOTO_URL)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'user_info'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.display_name} <{self.email}>"

    def to_dict(self):
        return {
            'userId': self.user_id,
            'email': self.email,
            'displayName': self.display_name,
            'photoURL': self.photo_url,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
