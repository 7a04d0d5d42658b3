# apps/core/__init__.py

"""
Core - Aplicação base do Task Board

Contém:
- Model UserInfo (cadastro vindo do frontend)
- Emissão e verificação de token de acesso
- Endpoints de status (raiz e health check)
"""
