# apps/core/auth_service.py

"""
Serviço de Autenticação - cadastro de usuários e tokens de acesso

O token é assinado com django.core.signing (HMAC + timestamp) usando
ACCESS_TOKEN_SECRET e expira após ACCESS_TOKEN_MAX_AGE segundos.
Não é JWT: o formato é o de signing.dumps e só este servidor o lê.
"""

import logging
import string
from typing import Dict, Optional, Tuple

from django.conf import settings
from django.core import signing
from django.core.exceptions import ValidationError
from django.utils import timezone
from django.utils.crypto import get_random_string

from .models import DEFAULT_PHOTO_URL, UserInfo

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Serviço encapsulado para cadastro e tokens

    - register_user: cria UserInfo (email único)
    - issue_token / verify_token: token assinado com validade
    """

    def __init__(self):
        # Atributos privados - encapsulados
        self._token_salt = 'apps.core.access-token'
        self._user_id_length = 9

    def register_user(self, dados: Dict) -> Tuple[bool, str, Optional[UserInfo]]:
        """
        Cadastra novo usuário

        Args:
            dados: Dict com uid, email, displayName, photoURL

        Returns:
            Tuple[sucesso, mensagem, usuario_criado]
        """
        email = (dados.get('email') or '').strip()
        if not email:
            return False, "Email is required.", None

        if UserInfo.objects.filter(email__iexact=email).exists():
            return False, "Email already exists.", None

        usuario = UserInfo(
            user_id=dados.get('uid') or self._gerar_user_id(),
            email=email,
            display_name=dados.get('displayName') or 'Unknown User',
            photo_url=dados.get('photoURL') or DEFAULT_PHOTO_URL,
            created_at=timezone.now(),
        )

        try:
            usuario.full_clean()
        except ValidationError as exc:
            campos = ', '.join(sorted(exc.message_dict))
            return False, f"Invalid fields: {campos}", None

        usuario.save()
        logger.info(f"👤 Usuário registrado: {usuario.email}")

        return True, "User registered successfully.", usuario

    def issue_token(self, payload: Dict) -> str:
        """Assina o payload recebido e devolve o token (signing.dumps, não JWT)"""
        return signing.dumps(
            payload,
            key=settings.ACCESS_TOKEN_SECRET,
            salt=self._token_salt,
            compress=True,
        )

    def verify_token(self, token: str) -> Optional[Dict]:
        """Retorna o payload do token, ou None se inválido/expirado"""
        try:
            return signing.loads(
                token,
                key=settings.ACCESS_TOKEN_SECRET,
                salt=self._token_salt,
                max_age=settings.ACCESS_TOKEN_MAX_AGE,
            )
        except signing.SignatureExpired:
            logger.info("🔒 Token expirado")
            return None
        except signing.BadSignature:
            logger.warning("🔒 Token com assinatura inválida")
            return None

    @staticmethod
    def extract_bearer(header: Optional[str]) -> Optional[str]:
        """Extrai o token de 'Authorization: Bearer <token>'"""
        if not header:
            return None

        partes = header.split()
        if len(partes) != 2 or partes[0].lower() != 'bearer':
            return None

        return partes[1]

    # =================== MÉTODOS PRIVADOS (ENCAPSULADOS) ===================

    def _gerar_user_id(self) -> str:
        """Id aleatório para cadastros sem uid do provedor"""
        return get_random_string(self._user_id_length, allowed_chars=string.ascii_lowercase + string.digits)


# Instância compartilhada pelas views e decorators
auth_service = AuthenticationService()
