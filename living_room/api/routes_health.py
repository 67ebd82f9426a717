"""
Endpoint de santé pour vérifier la disponibilité de l'API et du stockage.

Expose `/health` pour signaler l'état général de l'application et du backend SQL.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text

from living_room.api.deps import get_container
from living_room.core.container import Container

router = APIRouter(tags=["health"])


@router.get("/health")
def health(container: Container = Depends(get_container)):
    """Vérifie la disponibilité de l'API et du backend de stockage."""
    with container.engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    return {"status": "ok", "storage": container.storage_backend}
