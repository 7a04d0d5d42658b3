# apps/__init__.py

"""
Task Board - Aplicações Django

Este pacote contém todas as aplicações do sistema:
- core: Usuários, tokens de acesso e health check
- board: Tarefas ordenadas, API HTTP e WebSockets
"""

__version__ = '0.1.0'
