# apps/board/__init__.py

"""
Board - Tarefas do quadro Kanban

Funcionalidades:
- Coleção ordenada de tarefas por usuário
- API HTTP de criação, listagem, atualização e remoção
- WebSocket com sinal "taskUpdated" a cada mudança
"""
