"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Fournir aux endpoints le conteneur applicatif, une session SQLAlchemy par requête et l'identité
  portée par le jeton d'accès.
- Le conteneur est lu depuis `app.state`, ce qui permet aux tests d'injecter le leur.
"""

from collections.abc import Iterator

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from living_room.core.container import Container
from living_room.domain.auth import TokenData, decode_token
from living_room.domain.errors import UnauthorizedError


def get_container(request: Request) -> Container:
    """Retourne le conteneur attaché à l'application."""
    return request.app.state.container


def get_session(container: Container = Depends(get_container)) -> Iterator[Session]:
    """Ouvre une session par requête; les services valident eux-mêmes leurs écritures."""
    session = container.session_factory()
    try:
        yield session
    finally:
        session.close()


def require_token(
    authorization: str | None = Header(None),
    container: Container = Depends(get_container),
) -> TokenData:
    """Exige un jeton Bearer valide et non expiré; renvoie ses revendications."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise UnauthorizedError("missing_token")
    token = authorization.split(" ", 1)[1].strip()
    data = decode_token(
        token,
        container.resolve_secret("JWT_SECRET"),
        container.settings.JWT_ALG,
    )
    if not data:
        raise UnauthorizedError("invalid_token")
    return data
