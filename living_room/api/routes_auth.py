"""
Routes d'authentification pour l'API.

Ce module expose l'endpoint d'émission de jeton (`POST /api/users/authenticate`), seul endpoint
de l'inventaire accessible sans jeton.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from living_room.api.deps import get_container, get_session
from living_room.core.container import Container
from living_room.domain.auth import TokenAuthenticator
from living_room.domain.entities import AccessToken, Credentials
from living_room.domain.kinds import USER
from living_room.infra.repo.entity_repo import EntityRepo

router = APIRouter(prefix="/api/users", tags=["auth"])


@router.post("/authenticate", response_model=AccessToken)
def authenticate(
    p: Credentials,
    session: Session = Depends(get_session),
    container: Container = Depends(get_container),
):
    """Authentifie un utilisateur (id + mot de passe) et retourne un token d'accès.

    Utilisateur inconnu et mauvais mot de passe produisent la même réponse 401.
    """
    settings = container.settings
    authenticator = TokenAuthenticator(
        find_user=EntityRepo(session, USER).get_by_id,
        secret=container.resolve_secret("JWT_SECRET"),
        alg=settings.JWT_ALG,
        expires_min=settings.JWT_EXPIRES_MIN,
        password_scheme=settings.PASSWORD_SCHEME,
    )
    token = authenticator.authenticate(p.id, p.password)
    return AccessToken(access_token=token, expires_in=settings.JWT_EXPIRES_MIN * 60)
