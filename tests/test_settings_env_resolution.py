"""
Tests pour la résolution des variables d'environnement.

Ce module teste le chargement des paramètres depuis un fichier .env personnalisé et la priorité de
l'environnement sur les paramètres pour les secrets.
"""

from __future__ import annotations

import importlib
from pathlib import Path

import pytest

from living_room.core.container import Container
from living_room.infra.repo.db import MEMORY_URL, get_engine


@pytest.fixture()
def reload_settings(monkeypatch):
    """Recharge le module de paramètres (le fichier .env est résolu à l'import)."""
    settings_mod = importlib.import_module("living_room.core.settings")
    yield lambda: importlib.reload(settings_mod)
    monkeypatch.undo()
    importlib.reload(settings_mod)


def test_settings_reads_env_file(tmp_path: Path, monkeypatch, reload_settings) -> None:
    """
    Teste que les settings lisent correctement les fichiers d'environnement.

    Vérifie que les variables définies dans un fichier .env personnalisé sont chargées et
    converties vers leurs types.
    """
    env = tmp_path / ".env.custom"
    env.write_text(
        "JWT_EXPIRES_MIN=15\nPASSWORD_SCHEME=pbkdf2_sha256\nENFORCE_ASSOCIATION_REFERENCES=true\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ENV_FILE", str(env))
    for key in ("JWT_EXPIRES_MIN", "PASSWORD_SCHEME", "ENFORCE_ASSOCIATION_REFERENCES"):
        monkeypatch.delenv(key, raising=False)

    s = reload_settings().get_settings()
    assert s.JWT_EXPIRES_MIN == 15
    assert s.PASSWORD_SCHEME == "pbkdf2_sha256"
    assert s.ENFORCE_ASSOCIATION_REFERENCES is True
    assert s.PROTECTED_USER_ID == "admin-1234"


def test_settings_reject_unknown_password_scheme(monkeypatch) -> None:
    """Teste qu'un schéma de mot de passe inconnu est refusé au chargement."""
    from pydantic import ValidationError

    from living_room.core.settings import Settings

    monkeypatch.setenv("PASSWORD_SCHEME", "md5")
    with pytest.raises(ValidationError):
        Settings()


def test_secret_resolution_prefers_environment(monkeypatch, settings) -> None:
    """Teste la priorité env > settings pour les secrets."""
    c = Container(settings=settings, engine=get_engine(MEMORY_URL))
    monkeypatch.delenv("JWT_SECRET", raising=False)
    assert c.resolve_secret("JWT_SECRET") == "test-secret"
    monkeypatch.setenv("JWT_SECRET", "from-env")
    assert c.resolve_secret("JWT_SECRET") == "from-env"
    assert c.resolve_secret("UNKNOWN_SECRET") == ""
