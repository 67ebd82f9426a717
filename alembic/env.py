"""
Configuration de l'environnement Alembic pour les migrations de l'inventaire.

L'URL de base est résolue comme pour l'application (`DATABASE_URL` via les settings), avec un
fichier SQLite local par défaut. Les modes offline et online sont supportés.
"""

from __future__ import annotations

import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine, pool

from alembic import context  # type: ignore[attr-defined]

# Allow importing project modules when running via Alembic CLI
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.append(str(_root))

from living_room.core.settings import get_settings  # noqa: E402
from living_room.infra.repo.models import Base  # noqa: E402

config = context.config

# Interpret the config file for Python logging.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    """URL cible: `DATABASE_URL` des settings (env/.env, sinon le fichier SQLite local)."""
    return get_settings().DATABASE_URL


def run_migrations_offline() -> None:
    """Exécute les migrations en mode offline (SQL généré avec bindings littéraux)."""
    context.configure(
        url=_database_url(), target_metadata=target_metadata, literal_binds=True
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Exécute les migrations avec une connexion active à la base."""
    connectable = create_engine(_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
