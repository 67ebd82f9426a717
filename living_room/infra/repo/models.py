"""SQLAlchemy models for persistence layer (inventaire + utilisateurs)."""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    MetaData,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Classe de base pour tous les modèles SQLAlchemy."""

    metadata = MetaData()


class PersonORM(Base):
    """Modèle ORM des personnes (email unique)."""

    __tablename__ = "people"

    id = Column(String(10), primary_key=True)
    last_name = Column(String(60), nullable=False)
    first_name = Column(String(60), nullable=False)
    birth_date = Column(Date, nullable=True)
    country_birth_location = Column(String(60), nullable=False)
    email = Column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_people_email"),)


class TelevisionORM(Base):
    """Modèle ORM des téléviseurs."""

    __tablename__ = "televisions"

    id = Column(String(10), primary_key=True)
    brand = Column(String(60), nullable=False)
    model = Column(String(100), nullable=False)
    creation_date = Column(Date, nullable=True)
    value = Column(Numeric(16, 2), nullable=False, default=0)
    is_3d = Column(Boolean, nullable=False, default=False)
    is_being_sold = Column(Boolean, nullable=False, default=False)


class ComputerORM(Base):
    """Modèle ORM des ordinateurs."""

    __tablename__ = "computers"

    id = Column(String(10), primary_key=True)
    brand = Column(String(60), nullable=False)
    model = Column(String(100), nullable=False)
    creation_date = Column(Date, nullable=True)
    value = Column(Numeric(16, 2), nullable=False, default=0)
    is_desktop = Column(Boolean, nullable=False, default=False)
    is_being_sold = Column(Boolean, nullable=False, default=False)


class HomeTheaterORM(Base):
    """Modèle ORM des home cinémas."""

    __tablename__ = "home_theaters"

    id = Column(String(10), primary_key=True)
    brand = Column(String(60), nullable=False)
    model = Column(String(100), nullable=False)
    creation_date = Column(Date, nullable=True)
    value = Column(Numeric(16, 2), nullable=False, default=0)
    reads_blu_ray = Column(Boolean, nullable=False, default=False)
    is_being_sold = Column(Boolean, nullable=False, default=False)


class UserORM(Base):
    """Modèle ORM des utilisateurs (email unique, mot de passe encodé)."""

    __tablename__ = "users"

    id = Column(String(10), primary_key=True)
    name = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False)
    # 20 caractères en mode legacy, plus long pour un hash pbkdf2
    password = Column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)


class PersonTelevisionORM(Base):
    """Relation personne/téléviseur (références non contraintes)."""

    __tablename__ = "people_televisions"

    id = Column(String(10), primary_key=True)
    person_id = Column(String(10), nullable=False, index=True)
    television_id = Column(String(10), nullable=False, index=True)


class PersonComputerORM(Base):
    """Relation personne/ordinateur (références non contraintes)."""

    __tablename__ = "people_computers"

    id = Column(String(10), primary_key=True)
    person_id = Column(String(10), nullable=False, index=True)
    computer_id = Column(String(10), nullable=False, index=True)


class PersonHomeTheaterORM(Base):
    """Relation personne/home cinéma (références non contraintes)."""

    __tablename__ = "people_home_theaters"

    id = Column(String(10), primary_key=True)
    person_id = Column(String(10), nullable=False, index=True)
    home_theater_id = Column(String(10), nullable=False, index=True)


ORM_MODELS: dict[str, type[Base]] = {
    "person": PersonORM,
    "television": TelevisionORM,
    "computer": ComputerORM,
    "home_theater": HomeTheaterORM,
    "user": UserORM,
    "person_television": PersonTelevisionORM,
    "person_computer": PersonComputerORM,
    "person_home_theater": PersonHomeTheaterORM,
}
