"""
Entités du domaine métier.

Ce module définit les modèles de données de l'inventaire (personnes, appareils, relations et
utilisateurs). Les contraintes de champs sont portées par des types annotés partagés, de sorte que
chaque entité applique exactement les mêmes règles (identifiant de 10 caractères, textes bornés,
valeur monétaire positive, format email).
"""

from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    computed_field,
)

ID_LENGTH = 10

EntityId = Annotated[str, StringConstraints(min_length=ID_LENGTH, max_length=ID_LENGTH)]
ForeignId = Annotated[str, StringConstraints(min_length=1, max_length=ID_LENGTH)]
ShortText = Annotated[str, StringConstraints(min_length=1, max_length=60)]
LongText = Annotated[str, StringConstraints(min_length=1, max_length=100)]
UserName = Annotated[str, StringConstraints(min_length=3, max_length=20)]
PlainPassword = Annotated[str, StringConstraints(min_length=8, max_length=20)]
Money = Annotated[Decimal, Field(ge=0, max_digits=16, decimal_places=2)]
# Unicité insensible à la casse: l'adresse entière est stockée en minuscules
Email = Annotated[EmailStr, AfterValidator(str.lower)]


class Record(BaseModel):
    """Base commune: lecture depuis les lignes ORM autorisée."""

    model_config = ConfigDict(from_attributes=True)

    id: EntityId


class Person(Record):
    """Personne propriétaire d'appareils.

    `full_name` est recalculé à chaque lecture et n'est jamais stocké.
    """

    last_name: ShortText
    first_name: ShortText
    birth_date: date | None = None
    country_birth_location: ShortText
    email: Email

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        """Nom complet au format `Nom, Prénom`."""
        return f"{self.last_name}, {self.first_name}"


class Device(Record):
    """Champs communs aux appareils (marque, modèle, date, valeur)."""

    brand: ShortText
    model: LongText
    creation_date: date | None = None
    value: Money = Decimal("0")


class Television(Device):
    """Téléviseur."""

    is_3d: bool = False
    is_being_sold: bool = False


class Computer(Device):
    """Ordinateur."""

    is_desktop: bool = False
    is_being_sold: bool = False


class HomeTheater(Device):
    """Home cinéma."""

    reads_blu_ray: bool = False
    is_being_sold: bool = False


class User(Record):
    """Utilisateur de l'API tel que reçu (mot de passe en clair)."""

    name: UserName
    email: Email
    password: PlainPassword


class UserPublic(Record):
    """Utilisateur tel que renvoyé par l'API (sans mot de passe)."""

    name: str
    email: str


class PersonTelevision(Record):
    """Relation personne/téléviseur."""

    person_id: ForeignId
    television_id: ForeignId


class PersonComputer(Record):
    """Relation personne/ordinateur."""

    person_id: ForeignId
    computer_id: ForeignId


class PersonHomeTheater(Record):
    """Relation personne/home cinéma."""

    person_id: ForeignId
    home_theater_id: ForeignId


class Credentials(BaseModel):
    """Identifiants soumis à l'authentification."""

    id: str
    password: str


class AccessToken(BaseModel):
    """Jeton d'accès émis après authentification."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
