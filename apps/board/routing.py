# apps/board/routing.py

from django.urls import re_path
from . import consumers

# Rotas WebSocket para a aplicação board
websocket_urlpatterns = [
    # Sinal "taskUpdated" para todos os clientes conectados
    re_path(r'ws/tasks/?$', consumers.TaskConsumer.as_asgi()),
]
