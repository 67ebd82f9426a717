"""
Service CRUD générique, paramétré par un descripteur `EntityKind`.

Séquence commune à tous les types d'entités: validation -> écriture -> classification d'un
éventuel échec (conflit, absence, erreur opaque) -> validation de la transaction -> projection
publique.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from living_room.core.settings import Settings
from living_room.domain.credentials import LEGACY_SCHEME, store_password
from living_room.domain.errors import (
    ConflictError,
    NotFoundError,
    StoreFailure,
    ValidationError,
    WriteConflictError,
)
from living_room.domain.kinds import KINDS_BY_NAME, USER, EntityKind
from living_room.domain.uniqueness import UniquenessChecker
from living_room.infra.repo.entity_repo import EntityRepo

Body = Mapping[str, Any] | BaseModel


def _as_dict(body: Body) -> dict[str, Any]:
    if isinstance(body, BaseModel):
        return body.model_dump()
    return dict(body)


def _error_details(err: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in err.errors()
    ]


class CrudService:
    """Opérations CRUD pour un type d'entité.

    Responsabilités:
    - Valider les corps de requête via le schéma du type.
    - Persister via `EntityRepo` et valider la transaction avant de répondre.
    - Classifier les échecs d'écriture grâce au `UniquenessChecker`.
    """

    def __init__(
        self,
        session: Session,
        kind: EntityKind,
        password_scheme: str = LEGACY_SCHEME,
        protected_ids: Iterable[str] = (),
        enforce_references: bool = False,
    ) -> None:
        """Initialise le service.

        Paramètres:
        - session: session SQLAlchemy de la requête.
        - kind: descripteur du type d'entité.
        - password_scheme: schéma de stockage du champ secret (type User).
        - protected_ids: identifiants jamais supprimables.
        - enforce_references: vérifie l'existence des entités référencées par une relation.
        """
        self.session = session
        self.kind = kind
        self.repo = EntityRepo(session, kind)
        self.checker = UniquenessChecker(self.repo)
        self.password_scheme = password_scheme
        self.protected_ids = frozenset(protected_ids)
        self.enforce_references = enforce_references
        self._log = structlog.get_logger(__name__).bind(kind=kind.label)

    # -- lecture ---------------------------------------------------------

    def list_all(self) -> list[BaseModel]:
        return [self._public(row) for row in self.repo.get_all()]

    def get(self, record_id: str) -> BaseModel:
        row = self.repo.get_by_id(record_id)
        if row is None:
            raise NotFoundError(f"{self.kind.label} not found", details={"id": record_id})
        return self._public(row)

    def list_by_person(self, person_id: str) -> list[BaseModel]:
        """Relations d'une personne (liste vide si aucune)."""
        self._require_association()
        rows = self.repo.find_by(self.kind.person_field, person_id)
        return [self._public(row) for row in rows]

    def list_by_other(self, other_id: str) -> list[BaseModel]:
        """Relations d'un appareil (liste vide si aucune)."""
        self._require_association()
        rows = self.repo.find_by(self.kind.other_field, other_id)
        return [self._public(row) for row in rows]

    # -- écriture --------------------------------------------------------

    def create(self, body: Body) -> BaseModel:
        """Crée un enregistrement; ConflictError si l'id ou un champ unique est déjà pris."""
        values = self._to_values(self._validate(_as_dict(body)))
        self._check_references(values)
        try:
            row = self.repo.insert(values)
        except (IntegrityError, FlushError) as err:
            taken = self.checker.taken_fields(values)
            if taken:
                self._log.info("entity_conflict", id=values["id"], fields=taken)
                raise ConflictError(
                    f"{self.kind.label} not available", details={"fields": taken}
                ) from err
            raise StoreFailure("unclassified store failure on insert") from err
        self.session.commit()
        self._log.info("entity_created", id=row.id)
        return self._public(row)

    def replace(self, record_id: str, body: Body) -> BaseModel:
        """Remplace intégralement un enregistrement existant.

        L'id du chemin doit être identique à celui du corps, sinon rien n'est écrit. Si le
        stockage ne trouve aucune ligne à mettre à jour, l'existence est revérifiée: absente ->
        NotFoundError, toujours présente -> WriteConflictError.
        """
        data = _as_dict(body)
        if data.get("id") != record_id:
            raise ValidationError(
                "path id and body id differ",
                details={"path_id": record_id, "body_id": data.get("id")},
            )
        values = self._to_values(self._validate(data))
        self._check_references(values)
        try:
            updated = self.repo.replace(record_id, values)
        except IntegrityError as err:
            taken = self.checker.taken_fields(values, check_id=False, exclude_id=record_id)
            if taken:
                self._log.info("entity_conflict", id=record_id, fields=taken)
                raise ConflictError(
                    f"{self.kind.label} not available", details={"fields": taken}
                ) from err
            raise StoreFailure("unclassified store failure on update") from err
        if not updated:
            self.session.rollback()
            if not self.checker.id_taken(record_id):
                raise NotFoundError(f"{self.kind.label} not found", details={"id": record_id})
            self._log.error("entity_write_conflict", id=record_id)
            raise WriteConflictError(
                f"{self.kind.label} update was not applied", details={"id": record_id}
            )
        self.session.commit()
        self._log.info("entity_replaced", id=record_id)
        return self.get(record_id)

    def delete(self, record_id: str) -> None:
        """Supprime un enregistrement; les identifiants protégés sont toujours refusés."""
        if record_id in self.protected_ids:
            raise ValidationError(
                f"{self.kind.label} {record_id} cannot be deleted", details={"id": record_id}
            )
        if not self.repo.delete(record_id):
            self.session.rollback()
            raise NotFoundError(f"{self.kind.label} not found", details={"id": record_id})
        self.session.commit()
        self._log.info("entity_deleted", id=record_id)

    # -- interne ---------------------------------------------------------

    def _validate(self, data: dict[str, Any]) -> BaseModel:
        try:
            return self.kind.schema.model_validate(data)
        except PydanticValidationError as err:
            raise ValidationError(
                f"invalid {self.kind.label}", details={"errors": _error_details(err)}
            ) from err

    def _to_values(self, record: BaseModel) -> dict[str, Any]:
        computed = set(type(record).model_computed_fields)
        values = record.model_dump(exclude=computed)
        secret = self.kind.secret_field
        if secret:
            values[secret] = store_password(values[secret], self.password_scheme)
        return values

    def _public(self, row) -> BaseModel:
        return self.kind.public_schema.model_validate(row)

    def _check_references(self, values: dict[str, Any]) -> None:
        if not self.enforce_references or not self.kind.references:
            return
        missing = [
            field
            for field, ref in self.kind.references.items()
            if not EntityRepo(self.session, KINDS_BY_NAME[ref]).exists(id=values[field])
        ]
        if missing:
            raise ValidationError("unknown reference", details={"fields": missing})

    def _require_association(self) -> None:
        if not self.kind.is_association:
            raise TypeError(f"{self.kind.label} is not an association kind")


def build_service(session: Session, kind: EntityKind, settings: Settings) -> CrudService:
    """Construit le service d'un type à partir de la configuration applicative."""
    protected = (settings.PROTECTED_USER_ID,) if kind is USER else ()
    return CrudService(
        session,
        kind,
        password_scheme=settings.PASSWORD_SCHEME,
        protected_ids=protected,
        enforce_references=settings.ENFORCE_ASSOCIATION_REFERENCES,
    )
