# ============================================================
# Module : living_room/infra/repo/entity_repo.py
# Objet  : Accès SQL (CRUD) générique, un dépôt par type d'entité.
# ============================================================

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.kinds import EntityKind
from .models import ORM_MODELS, Base


class EntityRepo:
    """CRUD par clé primaire pour un type d'entité donné."""

    def __init__(self, session: Session, kind: EntityKind) -> None:
        """Construit le repo avec une session (SQLAlchemy) et un descripteur de type."""
        self._session = session
        self.kind = kind
        self.model = ORM_MODELS[kind.name]

    def get_all(self) -> list[Base]:
        """Retourne toutes les lignes, dans l'ordre des clés primaires."""
        stmt = select(self.model).order_by(self.model.id)
        return list(self._session.execute(stmt).scalars().all())

    def get_by_id(self, record_id: str) -> Base | None:
        """Retourne une ligne par id, ou None si absente."""
        return self._session.get(self.model, record_id)

    def insert(self, values: dict[str, Any]) -> Base:
        """Insère une ligne. Lève IntegrityError sur doublon (id ou champ unique)."""
        row = self.model(**values)
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError:
            self._session.rollback()
            raise
        return row

    def replace(self, record_id: str, values: dict[str, Any]) -> bool:
        """Remplace tous les champs d'une ligne existante.

        Retourne False si aucune ligne ne porte cet id. Lève IntegrityError sur collision d'un
        champ unique.
        """
        fields = {k: v for k, v in values.items() if k != "id"}
        stmt = (
            update(self.model)
            .where(self.model.id == record_id)
            .values(**fields)
            .execution_options(synchronize_session="fetch")
        )
        try:
            result = self._session.execute(stmt)
        except IntegrityError:
            self._session.rollback()
            raise
        return result.rowcount == 1

    def delete(self, record_id: str) -> bool:
        """Supprime une ligne; False si elle n'existe pas."""
        stmt = delete(self.model).where(self.model.id == record_id)
        result = self._session.execute(stmt)
        return result.rowcount == 1

    def find_by(self, field: str, value: str) -> list[Base]:
        """Filtre simple sur un champ (liste vide si aucune correspondance)."""
        column = getattr(self.model, field)
        stmt = select(self.model).where(column == value).order_by(self.model.id)
        return list(self._session.execute(stmt).scalars().all())

    def exists(self, exclude_id: str | None = None, **criteria: Any) -> bool:
        """Indique si une ligne satisfait tous les critères d'égalité."""
        clauses = [getattr(self.model, k) == v for k, v in criteria.items()]
        if exclude_id is not None:
            clauses.append(self.model.id != exclude_id)
        stmt = select(exists().where(*clauses))
        return bool(self._session.execute(stmt).scalar())
