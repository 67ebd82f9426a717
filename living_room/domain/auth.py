"""
Module d'authentification et de gestion des tokens.

Ce module fournit la création et la validation des tokens JWT ainsi que l'authentificateur qui
vérifie des identifiants soumis contre les utilisateurs stockés.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
import structlog
from jwt import InvalidTokenError
from pydantic import BaseModel, ValidationError

from living_room.domain.credentials import LEGACY_SCHEME, dummy_verify, verify_password
from living_room.domain.errors import UnauthorizedError

log = structlog.get_logger(__name__)


class TokenData(BaseModel):
    """Données contenues dans un token JWT."""

    sub: str
    iat: int | None = None
    exp: int


def create_access_token(
    secret: str,
    alg: str,
    expires_min: int,
    payload: dict[str, Any],
    now: datetime | None = None,
) -> str:
    """Crée un token JWT d'accès (émis à `now`, expirant `expires_min` minutes plus tard)."""
    issued = now or datetime.now(UTC)
    to_encode = payload.copy()
    to_encode.update({"iat": issued, "exp": issued + timedelta(minutes=expires_min)})
    return jwt.encode(to_encode, secret, algorithm=alg)


def decode_token(token: str, secret: str, alg: str) -> TokenData | None:
    """Décode et valide un token JWT.

    Signature invalide, token expiré ou malformé: même résultat (None).
    """
    try:
        data = jwt.decode(
            token, secret, algorithms=[alg], options={"require": ["exp", "sub"]}
        )
        return TokenData(**data)
    except (InvalidTokenError, ValidationError):
        return None


class TokenAuthenticator:
    """Vérifie des identifiants et émet un jeton d'accès signé.

    Paramètres:
    - find_user: fonction `id -> ligne utilisateur | None`.
    - secret / alg / expires_min: paramètres de signature du JWT.
    - password_scheme: schéma configuré, pour une vérification factice de même coût quand
      l'utilisateur est inconnu.
    """

    def __init__(
        self,
        find_user: Callable[[str], Any],
        secret: str,
        alg: str = "HS256",
        expires_min: int = 60,
        password_scheme: str = LEGACY_SCHEME,
    ) -> None:
        self.find_user = find_user
        self.secret = secret
        self.alg = alg
        self.expires_min = expires_min
        self.password_scheme = password_scheme

    def authenticate(self, user_id: str, password: str, now: datetime | None = None) -> str:
        """Retourne un token si les identifiants sont valides.

        Utilisateur inconnu et mauvais mot de passe lèvent la même `UnauthorizedError`.
        """
        user = self.find_user(user_id) if user_id else None
        if user is None:
            dummy_verify(password, self.password_scheme)
            log.info("auth_failed")
            raise UnauthorizedError("invalid_credentials")
        if not verify_password(password, user.password or ""):
            log.info("auth_failed")
            raise UnauthorizedError("invalid_credentials")
        token = create_access_token(
            secret=self.secret,
            alg=self.alg,
            expires_min=self.expires_min,
            payload={"sub": user.id},
            now=now,
        )
        log.info("auth_succeeded", user_id=user.id)
        return token
