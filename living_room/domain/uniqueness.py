"""
Vérification de disponibilité des identifiants et champs uniques.

Les prédicats lisent l'état courant du stockage. Ils servent à classifier un échec d'écriture
(conflit ou erreur opaque); l'unicité elle-même est garantie par les contraintes de la base.
"""

from __future__ import annotations

from typing import Any


class UniquenessChecker:
    """Prédicats d'unicité pour un type d'entité (adossés à un `EntityRepo`)."""

    def __init__(self, repo) -> None:
        self.repo = repo
        self.kind = repo.kind

    def id_taken(self, record_id: str) -> bool:
        return self.repo.exists(id=record_id)

    def field_taken(self, field: str, value: Any, exclude_id: str | None = None) -> bool:
        """Vrai si une autre ligne (hors `exclude_id`) porte déjà cette valeur."""
        if field not in self.kind.unique_fields:
            return False
        return self.repo.exists(exclude_id=exclude_id, **{field: value})

    def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        return self.field_taken("email", email, exclude_id=exclude_id)

    def taken_fields(
        self, values: dict[str, Any], check_id: bool = True, exclude_id: str | None = None
    ) -> list[str]:
        """Liste les champs (id compris) dont la valeur est déjà prise."""
        taken = []
        if check_id and self.id_taken(values["id"]):
            taken.append("id")
        for field in self.kind.unique_fields:
            if self.field_taken(field, values.get(field), exclude_id=exclude_id):
                taken.append(field)
        return taken

    def not_available(self, values: dict[str, Any]) -> bool:
        """OU logique de tous les contrôles applicables (id puis champs uniques)."""
        return bool(self.taken_fields(values))
