"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares, gestionnaires d'erreurs,
routes d'authentification et routes CRUD de l'inventaire.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (timing, request id)
- Monter les routers (santé, authentification, entités)
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from living_room.api.errors import register_error_handlers
from living_room.api.routes_auth import router as auth_router
from living_room.api.routes_entities import build_entity_routers
from living_room.api.routes_health import router as health_router
from living_room.core.container import Container, container
from living_room.core.logging import setup_logging
from living_room.middlewares.request_id import RequestIDMiddleware
from living_room.middlewares.timing import TimingMiddleware


def create_app(app_container: Container | None = None) -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Attache le conteneur (paramètres, moteur SQL) à `app.state`
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes de santé, d'authentification et d'entités
    """
    setup_logging()
    app_container = app_container or container
    settings = app_container.settings
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.state.container = app_container
    # Le dernier middleware ajouté est le plus externe
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(auth_router)
    for router in build_entity_routers():
        app.include_router(router)
    return app


app = create_app()


def run() -> None:
    """Point d'entrée console: sert l'application avec uvicorn."""
    uvicorn.run(
        "living_room.app.main:app",
        host=container.settings.APP_HOST,
        port=container.settings.APP_PORT,
    )


if __name__ == "__main__":
    run()
