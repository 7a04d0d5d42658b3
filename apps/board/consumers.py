# apps/board/consumers.py

import json
import logging
from urllib.parse import parse_qs

from channels.generic.websocket import AsyncWebsocketConsumer
from django.conf import settings
from django.utils import timezone

from apps.core.auth_service import auth_service
from apps.core.permissions import tokens_enforced
from .notifications import TASK_UPDATED_EVENT

logger = logging.getLogger(__name__)


class TaskConsumer(AsyncWebsocketConsumer):
    """
    Consumer WebSocket do sinal "taskUpdated"

    Cada cliente conectado entra no grupo de broadcast e recebe um
    evento sem payload a cada mutação; ele deve refazer GET /tasksget.
    Quem não está conectado no momento do envio não recebe nada.
    """

    async def connect(self):
        """
        Entra no grupo de broadcast
        Com TASKS_REQUIRE_TOKEN, exige ?token= válido
        """
        self.group_name = settings.TASKS_BROADCAST_GROUP
        self.joined = False

        if tokens_enforced() and not self.has_valid_token():
            logger.warning("❌ Conexão WebSocket rejeitada - token ausente ou inválido")
            await self.close()
            return

        await self.channel_layer.group_add(
            self.group_name,
            self.channel_name
        )
        self.joined = True

        await self.accept()
        logger.info(f"✅ Cliente conectado ({self.channel_name})")

    async def disconnect(self, close_code):
        """
        Sai do grupo; desconexão não é retentada
        """
        if self.joined:
            await self.channel_layer.group_discard(
                self.group_name,
                self.channel_name
            )

        logger.info(f"🔌 Client disconnected ({close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        """
        Único comando aceito do cliente: ping (heartbeat)
        """
        try:
            data = json.loads(text_data or '')
        except json.JSONDecodeError:
            logger.error("❌ JSON inválido recebido via WebSocket")
            return

        if isinstance(data, dict) and data.get('type') == 'ping':
            await self.send(text_data=json.dumps({
                'type': 'pong',
                'timestamp': timezone.now().isoformat()
            }))

    # === Handlers de eventos do channel layer ===

    async def task_updated(self, event):
        """
        Repassa o sinal de mudança ao cliente
        """
        await self.send(text_data=json.dumps({'type': TASK_UPDATED_EVENT}))

    # === Métodos auxiliares ===

    def has_valid_token(self):
        query = parse_qs(self.scope.get('query_string', b'').decode())
        tokens = query.get('token')
        if not tokens:
            return False
        return auth_service.verify_token(tokens[0]) is not None
