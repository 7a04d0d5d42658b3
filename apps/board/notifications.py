# apps/board/notifications.py

import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings

logger = logging.getLogger(__name__)

# Nome do evento recebido pelo cliente WebSocket
TASK_UPDATED_EVENT = 'taskUpdated'

# Tipo da mensagem no channel layer (despachada para TaskConsumer.task_updated)
TASK_UPDATED_MESSAGE = 'task.updated'


class ChangeNotificationBus:
    """
    Avisa todos os observadores conectados que o conjunto de tarefas mudou

    O sinal não tem payload: quem recebe refaz o GET /tasksget.
    Envio fire-and-forget - falhas são logadas e nunca chegam ao request.
    """

    def __init__(self, group_name=None, channel_layer=None):
        self._group_name = group_name
        self._channel_layer = channel_layer

    @property
    def group_name(self):
        return self._group_name or settings.TASKS_BROADCAST_GROUP

    def publish(self):
        """Envia um sinal "taskUpdated" para o grupo de broadcast"""
        try:
            channel_layer = self._channel_layer or get_channel_layer()
            if channel_layer is None:
                logger.warning("⚠️ CHANNEL_LAYERS não configurado - notificação descartada")
                return

            async_to_sync(channel_layer.group_send)(
                self.group_name,
                {'type': TASK_UPDATED_MESSAGE}
            )
            logger.debug(f"📣 {TASK_UPDATED_EVENT} enviado para o grupo {self.group_name}")

        except Exception:
            logger.exception(f"❌ Falha ao notificar o grupo {self.group_name}")
