"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit les fixtures communes: un conteneur
adossé à une base SQLite en mémoire (neuve pour chaque test), un client HTTP et des en-têtes
d'authentification obtenus auprès de l'utilisateur générique.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from living_room...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Le conteneur global, créé à l'import de l'application, reste en mémoire pendant les tests
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from fastapi.testclient import TestClient  # noqa: E402

from living_room.app.main import create_app  # noqa: E402
from living_room.core.container import Container  # noqa: E402
from living_room.core.http_constants import HTTP_OK  # noqa: E402
from living_room.core.settings import Settings  # noqa: E402
from living_room.domain.crud import build_service  # noqa: E402
from living_room.infra.repo.db import MEMORY_URL, get_engine  # noqa: E402

ADMIN_ID = "admin-1234"
ADMIN_PASSWORD = "admin123"


@pytest.fixture()
def settings() -> Settings:
    """Paramètres de test (secret JWT fixe, base en mémoire, données initiales)."""
    return Settings(
        DATABASE_URL=MEMORY_URL,
        JWT_SECRET="test-secret",
        SEED_ON_STARTUP=True,
        APP_DEBUG=False,
    )


@pytest.fixture()
def app_container(settings: Settings) -> Container:
    """Conteneur neuf: moteur SQLite en mémoire propre au test."""
    return Container(settings=settings, engine=get_engine(MEMORY_URL))


@pytest.fixture()
def make_service(app_container: Container):
    """Fabrique de services CRUD, une session neuve par service.

    Les paramètres passés en mots-clés surchargent ceux du conteneur.
    """
    sessions = []

    def _make(kind, **overrides):
        session = app_container.session_factory()
        sessions.append(session)
        current = app_container.settings
        if overrides:
            current = current.model_copy(update=overrides)
        return build_service(session, kind, current)

    yield _make
    for session in sessions:
        session.close()


@pytest.fixture()
def client(app_container: Container) -> TestClient:
    """Client HTTP sur une application branchée au conteneur de test."""
    return TestClient(create_app(app_container))


@pytest.fixture()
def auth_headers(client: TestClient) -> dict[str, str]:
    """En-têtes Bearer obtenus avec l'utilisateur générique."""
    r = client.post(
        "/api/users/authenticate", json={"id": ADMIN_ID, "password": ADMIN_PASSWORD}
    )
    assert r.status_code == HTTP_OK, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}
