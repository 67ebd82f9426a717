# ============================================================
# Tests : tests/test_entity_repo.py
# Objet  : CRUD générique via SQLAlchemy (sqlite mémoire).
# ============================================================
"""
Tests pour le dépôt générique des entités.

Ce module teste les opérations par clé primaire et les filtres de relation sur une base SQLite en
mémoire.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from living_room.core.container import Container
from living_room.core.settings import DEFAULT_DATABASE_URL, Settings
from living_room.domain.crud import build_service
from living_room.domain.kinds import PERSON, PERSON_COMPUTER, TELEVISION
from living_room.infra.repo.db import MEMORY_URL, create_schema, get_engine
from living_room.infra.repo.entity_repo import EntityRepo


def _session() -> Session:
    """Crée une session SQLAlchemy avec une base SQLite en mémoire."""
    engine = get_engine("sqlite+pysqlite:///:memory:")
    create_schema(engine)
    return Session(bind=engine)


def _tv(tv_id: str, **extra) -> dict:
    values = {"id": tv_id, "brand": "Vony", "model": "X1", "value": Decimal("10.00")}
    values.update(extra)
    return values


def test_insert_get_and_list() -> None:
    """Teste l'insertion puis la lecture par id et la liste complète."""
    repo = EntityRepo(_session(), TELEVISION)
    repo.insert(_tv("tv-0000002"))
    repo.insert(_tv("tv-0000001"))
    got = repo.get_by_id("tv-0000001")
    assert got is not None and got.brand == "Vony"
    assert [r.id for r in repo.get_all()] == ["tv-0000001", "tv-0000002"]
    assert repo.get_by_id("tv-0000009") is None


def test_insert_duplicate_key_raises() -> None:
    """Teste que la clé primaire est une contrainte d'unicité du stockage."""
    session = _session()
    EntityRepo(session, TELEVISION).insert(_tv("tv-0000001"))
    session.commit()
    session.expunge_all()
    with pytest.raises(IntegrityError):
        EntityRepo(session, TELEVISION).insert(_tv("tv-0000001", brand="Other"))


def test_unique_email_enforced_by_store() -> None:
    """Teste que l'email des personnes est unique au niveau de la base."""
    repo = EntityRepo(_session(), PERSON)
    person = {
        "id": "p-00000001",
        "last_name": "Silva",
        "first_name": "Ana",
        "country_birth_location": "Brazil",
        "email": "ana@livingroom.io",
    }
    repo.insert(person)
    with pytest.raises(IntegrityError):
        repo.insert({**person, "id": "p-00000002"})


def test_replace_and_delete_report_missing_rows() -> None:
    """Teste que replace/delete signalent l'absence de ligne."""
    session = _session()
    repo = EntityRepo(session, TELEVISION)
    repo.insert(_tv("tv-0000001"))
    assert repo.replace("tv-0000001", _tv("tv-0000001", brand="Sany")) is True
    assert repo.get_by_id("tv-0000001").brand == "Sany"
    assert repo.replace("tv-0000404", _tv("tv-0000404")) is False
    assert repo.delete("tv-0000001") is True
    assert repo.delete("tv-0000001") is False


def test_find_by_and_exists() -> None:
    """Teste le filtre de relation et le prédicat d'existence."""
    repo = EntityRepo(_session(), PERSON_COMPUTER)
    repo.insert({"id": "pc-0000001", "person_id": "p-1", "computer_id": "c-1"})
    repo.insert({"id": "pc-0000002", "person_id": "p-1", "computer_id": "c-2"})
    repo.insert({"id": "pc-0000003", "person_id": "p-2", "computer_id": "c-2"})
    assert [r.id for r in repo.find_by("person_id", "p-1")] == ["pc-0000001", "pc-0000002"]
    assert [r.id for r in repo.find_by("computer_id", "c-2")] == ["pc-0000002", "pc-0000003"]
    assert repo.find_by("person_id", "p-9") == []
    assert repo.exists(id="pc-0000001")
    assert not repo.exists(id="pc-0000001", exclude_id="pc-0000001")


def test_default_engine_uses_local_file_with_regular_pool(monkeypatch) -> None:
    """Teste que la base par défaut est le fichier partagé avec Alembic, sans connexion unique."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert Settings(_env_file=None).DATABASE_URL == DEFAULT_DATABASE_URL
    engine = get_engine()
    assert engine.url.database == "./living_room.db"
    assert not isinstance(engine.pool, StaticPool)
    assert isinstance(get_engine(MEMORY_URL).pool, StaticPool)


def test_failed_create_in_one_session_keeps_pending_insert_of_another(tmp_path, settings) -> None:
    """Teste l'isolation des transactions concurrentes sur une base fichier.

    Une écriture refusée dans une session (et son annulation) ne doit ni voir ni défaire
    l'insertion non encore validée d'une autre session.
    """
    url = f"sqlite:///{tmp_path / 'inventory.db'}?timeout=0"
    container = Container(
        settings=settings.model_copy(update={"DATABASE_URL": url}), engine=get_engine(url)
    )
    first = container.session_factory()
    second = container.session_factory()
    try:
        EntityRepo(first, TELEVISION).insert(_tv("tv-000000A"))

        assert EntityRepo(second, TELEVISION).get_by_id("tv-000000A") is None
        with pytest.raises(OperationalError):
            build_service(second, TELEVISION, container.settings).create(_tv("1111111111"))
        second.rollback()
        second.close()

        first.commit()
    finally:
        first.close()
        second.close()

    with container.session_factory() as fresh:
        assert EntityRepo(fresh, TELEVISION).get_by_id("tv-000000A") is not None
