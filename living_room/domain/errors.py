"""
Taxonomie des erreurs du domaine.

Chaque erreur porte un code stable et le statut HTTP qui lui correspond; la couche API se contente
de les traduire en enveloppes JSON.
"""

from __future__ import annotations

from typing import Any

from living_room.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_CONFLICT,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    HTTP_UNAUTHORIZED,
)


class DomainError(Exception):
    """Erreur de base du domaine (code + message + détails optionnels)."""

    status_code = HTTP_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialise l'erreur avec un message lisible et des détails sérialisables."""
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(DomainError):
    """Entrée malformée ou hors bornes, corrigeable par l'appelant."""

    status_code = HTTP_BAD_REQUEST
    code = "VALIDATION_ERROR"


class ConflictError(DomainError):
    """Violation d'unicité (identifiant ou email déjà pris)."""

    status_code = HTTP_CONFLICT
    code = "CONFLICT"


class NotFoundError(DomainError):
    """Aucun enregistrement pour l'identifiant demandé."""

    status_code = HTTP_NOT_FOUND
    code = "NOT_FOUND"


class UnauthorizedError(DomainError):
    """Jeton absent, invalide ou expiré, ou échec de connexion."""

    status_code = HTTP_UNAUTHORIZED
    code = "UNAUTHORIZED"


class StoreFailure(DomainError):
    """Échec de persistance non classifié (jamais réessayé)."""

    status_code = HTTP_INTERNAL_SERVER_ERROR
    code = "STORE_FAILURE"


class WriteConflictError(StoreFailure):
    """Mise à jour refusée par le stockage alors que l'enregistrement existe toujours."""

    code = "WRITE_CONFLICT"
