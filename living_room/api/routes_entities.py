"""
Routes CRUD générées à partir des descripteurs d'entités.

Une seule fabrique produit, pour chaque type, les endpoints liste / lecture / création /
remplacement / suppression, et pour les relations les listes par personne et par appareil.
Toutes ces routes exigent un jeton d'accès.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from living_room.api.deps import get_container, get_session, require_token
from living_room.core.container import Container
from living_room.domain.crud import CrudService, build_service
from living_room.domain.kinds import ALL_KINDS, EntityKind

API_PREFIX = "/api"


def build_router(kind: EntityKind) -> APIRouter:
    """Construit le routeur d'un type d'entité."""
    router = APIRouter(
        prefix=f"{API_PREFIX}/{kind.path}",
        tags=[kind.label],
        dependencies=[Depends(require_token)],
    )
    public = kind.public_schema
    schema = kind.schema

    def get_service(
        session: Session = Depends(get_session),
        container: Container = Depends(get_container),
    ) -> CrudService:
        return build_service(session, kind, container.settings)

    @router.get("", response_model=list[public], name=f"list_{kind.name}")
    def list_records(service: CrudService = Depends(get_service)):
        """Retourne tous les enregistrements du type."""
        return service.list_all()

    @router.get("/{record_id}", response_model=public, name=f"get_{kind.name}")
    def get_record(record_id: str, service: CrudService = Depends(get_service)):
        """Retourne un enregistrement par id (404 si absent)."""
        return service.get(record_id)

    @router.post(
        "",
        response_model=public,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{kind.name}",
    )
    def create_record(
        response: Response,
        body: schema,
        service: CrudService = Depends(get_service),
    ):
        """Crée un enregistrement (400 invalide, 409 id/email déjà pris)."""
        created = service.create(body)
        response.headers["Location"] = f"{router.prefix}/{created.id}"
        return created

    @router.put(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"replace_{kind.name}",
    )
    def replace_record(
        record_id: str,
        body: schema,
        service: CrudService = Depends(get_service),
    ):
        """Remplace intégralement un enregistrement (l'id du corps doit égaler celui du chemin)."""
        service.replace(record_id, body)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{record_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"delete_{kind.name}",
    )
    def delete_record(record_id: str, service: CrudService = Depends(get_service)):
        """Supprime un enregistrement (404 si absent)."""
        service.delete(record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    if kind.is_association:

        @router.get(
            "/people/{person_id}",
            response_model=list[public],
            name=f"list_{kind.name}_by_person",
        )
        def list_by_person(person_id: str, service: CrudService = Depends(get_service)):
            """Relations d'une personne (liste éventuellement vide)."""
            return service.list_by_person(person_id)

        @router.get(
            f"/{kind.other_path}/{{other_id}}",
            response_model=list[public],
            name=f"list_{kind.name}_by_other",
        )
        def list_by_other(other_id: str, service: CrudService = Depends(get_service)):
            """Relations d'un appareil (liste éventuellement vide)."""
            return service.list_by_other(other_id)

    return router


def build_entity_routers() -> list[APIRouter]:
    """Un routeur par type d'entité déclaré."""
    return [build_router(kind) for kind in ALL_KINDS]
