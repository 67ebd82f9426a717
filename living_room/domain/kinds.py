"""
Descripteurs des types d'entités.

Un `EntityKind` décrit tout ce qui distingue un type d'entité d'un autre: schéma de validation,
schéma public, champs uniques, champs de relation et références. Le service CRUD générique et la
fabrique de routes s'appuient uniquement sur ces descripteurs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel

from living_room.domain import entities


@dataclass(frozen=True)
class EntityKind:
    """Métadonnées d'un type d'entité.

    Attributs
    - name: identifiant interne (clé du registre et du modèle ORM).
    - label: libellé lisible utilisé dans les messages et logs.
    - path: segment d'URL sous `/api`.
    - schema: modèle Pydantic de validation des entrées.
    - public: modèle renvoyé aux appelants (par défaut `schema`).
    - unique_fields: champs secondaires soumis à unicité (ex. email).
    - secret_field: champ stocké via la couche d'identifiants.
    - person_field / other_field: clés de relation (types d'association).
    - other_path: segment d'URL de la liste par appareil.
    - references: champ -> type d'entité référencé.
    """

    name: str
    label: str
    path: str
    schema: type[BaseModel]
    public: type[BaseModel] | None = None
    unique_fields: tuple[str, ...] = ()
    secret_field: str | None = None
    person_field: str | None = None
    other_field: str | None = None
    other_path: str | None = None
    references: dict[str, str] = field(default_factory=dict)

    @property
    def is_association(self) -> bool:
        return self.person_field is not None and self.other_field is not None

    @property
    def public_schema(self) -> type[BaseModel]:
        return self.public or self.schema


PERSON = EntityKind(
    name="person",
    label="Person",
    path="people",
    schema=entities.Person,
    unique_fields=("email",),
)
TELEVISION = EntityKind(
    name="television", label="Television", path="televisions", schema=entities.Television
)
COMPUTER = EntityKind(
    name="computer", label="Computer", path="computers", schema=entities.Computer
)
HOME_THEATER = EntityKind(
    name="home_theater",
    label="HomeTheater",
    path="home-theaters",
    schema=entities.HomeTheater,
)
USER = EntityKind(
    name="user",
    label="User",
    path="users",
    schema=entities.User,
    public=entities.UserPublic,
    unique_fields=("email",),
    secret_field="password",
)
PERSON_TELEVISION = EntityKind(
    name="person_television",
    label="PersonTelevision",
    path="people-televisions",
    schema=entities.PersonTelevision,
    person_field="person_id",
    other_field="television_id",
    other_path="televisions",
    references={"person_id": "person", "television_id": "television"},
)
PERSON_COMPUTER = EntityKind(
    name="person_computer",
    label="PersonComputer",
    path="people-computers",
    schema=entities.PersonComputer,
    person_field="person_id",
    other_field="computer_id",
    other_path="computers",
    references={"person_id": "person", "computer_id": "computer"},
)
PERSON_HOME_THEATER = EntityKind(
    name="person_home_theater",
    label="PersonHomeTheater",
    path="people-home-theaters",
    schema=entities.PersonHomeTheater,
    person_field="person_id",
    other_field="home_theater_id",
    other_path="home-theaters",
    references={"person_id": "person", "home_theater_id": "home_theater"},
)

ALL_KINDS: tuple[EntityKind, ...] = (
    PERSON,
    TELEVISION,
    COMPUTER,
    HOME_THEATER,
    USER,
    PERSON_TELEVISION,
    PERSON_COMPUTER,
    PERSON_HOME_THEATER,
)
KINDS_BY_NAME: dict[str, EntityKind] = {k.name: k for k in ALL_KINDS}
