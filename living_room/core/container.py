"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, moteur SQLAlchemy, factory de sessions) et expose un
singleton `container` utilisé par le reste de l'application.
"""

import os
from decimal import Decimal

import structlog
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from living_room.core.settings import Settings, get_settings
from living_room.infra.repo.db import create_schema, get_engine, get_session_factory
from living_room.infra.repo.models import PersonORM, TelevisionORM, UserORM

log = structlog.get_logger(__name__)

# Mot de passe en clair = "admin123" (encodage historique)
SEED_ROWS = (
    (
        UserORM,
        {
            "id": "admin-1234",
            "name": "admin",
            "email": "admin@example.com",
            "password": "V1ZkU2RHRlhOSGhOYWsw",
        },
    ),
    (
        PersonORM,
        {
            "id": "1234567890",
            "last_name": "blabla",
            "first_name": "blublu",
            "country_birth_location": "Brazil",
            "email": "email@example.com",
        },
    ),
    (
        TelevisionORM,
        {
            "id": "1111111111",
            "brand": "Vony",
            "model": "bleble",
            "value": Decimal("0"),
            "is_3d": False,
            "is_being_sold": False,
        },
    ),
)


def seed(session: Session) -> int:
    """Insère les lignes initiales absentes et retourne le nombre d'insertions."""
    inserted = 0
    for model, values in SEED_ROWS:
        if session.get(model, values["id"]) is not None:
            continue
        session.add(model(**values))
        inserted += 1
    session.commit()
    return inserted


class Container:
    def __init__(self, settings: Settings | None = None, engine: Engine | None = None):
        self.settings = settings or get_settings()
        self.engine = engine or get_engine(self.settings.DATABASE_URL)
        self.session_factory = get_session_factory(self.engine)
        self.storage_backend = self.engine.dialect.name
        create_schema(self.engine)
        if self.settings.SEED_ON_STARTUP:
            with self.session_factory() as session:
                inserted = seed(session)
            log.info("seed_applied", inserted=inserted, storage=self.storage_backend)

    def resolve_secret(self, key: str) -> str:
        """Résolution d'un secret: env → settings.

        Ne journalise jamais la valeur du secret.
        """
        env_val = os.getenv(key)
        if env_val:
            return env_val
        return getattr(self.settings, key, "") or ""


container = Container()
