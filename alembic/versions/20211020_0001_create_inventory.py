# mypy: ignore-errors
"""
Migration Alembic initiale de l'inventaire.

Crée les tables des personnes, appareils, relations et utilisateurs, les index d'unicité des emails
et les lignes initiales (utilisateur générique, personne et téléviseur d'exemple).
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20211020_0001"
down_revision = None
branch_labels = None
depends_on = None

DEVICE_TABLES = {
    "televisions": "is_3d",
    "computers": "is_desktop",
    "home_theaters": "reads_blu_ray",
}
ASSOCIATION_TABLES = {
    "people_televisions": "television_id",
    "people_computers": "computer_id",
    "people_home_theaters": "home_theater_id",
}


def upgrade() -> None:
    """
    Applique la migration: tables, contraintes d'unicité et données initiales.

    Les tables de relation ne portent pas de clés étrangères: les références restent libres.
    """
    people = op.create_table(
        "people",
        sa.Column("id", sa.String(length=10), primary_key=True),
        sa.Column("last_name", sa.String(length=60), nullable=False),
        sa.Column("first_name", sa.String(length=60), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("country_birth_location", sa.String(length=60), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("email", name="uq_people_email"),
    )
    devices = {}
    for table, flag in DEVICE_TABLES.items():
        devices[table] = op.create_table(
            table,
            sa.Column("id", sa.String(length=10), primary_key=True),
            sa.Column("brand", sa.String(length=60), nullable=False),
            sa.Column("model", sa.String(length=100), nullable=False),
            sa.Column("creation_date", sa.Date(), nullable=True),
            sa.Column("value", sa.Numeric(16, 2), nullable=False),
            sa.Column(flag, sa.Boolean(), nullable=False),
            sa.Column("is_being_sold", sa.Boolean(), nullable=False),
        )
    for table, other in ASSOCIATION_TABLES.items():
        op.create_table(
            table,
            sa.Column("id", sa.String(length=10), primary_key=True),
            sa.Column("person_id", sa.String(length=10), nullable=False),
            sa.Column(other, sa.String(length=10), nullable=False),
        )
        op.create_index(f"ix_{table}_person_id", table, ["person_id"])
        op.create_index(f"ix_{table}_{other}", table, [other])
    users = op.create_table(
        "users",
        sa.Column("id", sa.String(length=10), primary_key=True),
        sa.Column("name", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # Mot de passe en clair = "admin123"
    op.bulk_insert(
        users,
        [
            {
                "id": "admin-1234",
                "name": "admin",
                "email": "admin@example.com",
                "password": "V1ZkU2RHRlhOSGhOYWsw",
            }
        ],
    )
    op.bulk_insert(
        people,
        [
            {
                "id": "1234567890",
                "last_name": "blabla",
                "first_name": "blublu",
                "birth_date": None,
                "country_birth_location": "Brazil",
                "email": "email@example.com",
            }
        ],
    )
    op.bulk_insert(
        devices["televisions"],
        [
            {
                "id": "1111111111",
                "brand": "Vony",
                "model": "bleble",
                "creation_date": None,
                "value": 0,
                "is_3d": False,
                "is_being_sold": False,
            }
        ],
    )


def downgrade() -> None:
    """Annule la migration en supprimant toutes les tables de l'inventaire."""
    op.drop_table("users")
    for table in ASSOCIATION_TABLES:
        op.drop_table(table)
    for table in DEVICE_TABLES:
        op.drop_table(table)
    op.drop_table("people")
