"""
Router factory for audited entity kinds.

Each feature package (`sections/`, `grades/`, ...) calls `build_router` with
its `EntityKind` and pydantic schemas. Route shapes:

- GET    /all            active rows (public)
- GET    /all-adm        every row, including soft-deleted (authenticated)
- GET    /all-audit      audit trail (authenticated)
- GET    /{entity_id}    one row (authenticated)
- POST   /create         insert + audit (admin)
- PUT    /update/{id}    update + audit (admin)
- DELETE /delete/{id}    soft delete + audit (admin)
"""

import asyncpg
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from auth import dependencies as auth_dependencies
from core import db

from .kinds import EntityKind
from .repository import EntityRepository


def acting_username(user: dict) -> str:
    return str(user["usuario"])


def _not_found(kind: EntityKind) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{kind.label} not found.")


def repository_dependency(kind: EntityKind):
    """
    FastAPI dependency building a repository for `kind` on the injected pool.
    """

    def get_repository(pool: asyncpg.Pool = Depends(db.get_pool)) -> EntityRepository:
        return EntityRepository(kind, pool=pool)

    return get_repository


def build_router(
    kind: EntityKind,
    *,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
) -> APIRouter:
    router = APIRouter()
    get_repository = repository_dependency(kind)

    @router.get("/all")
    async def list_active(repo: EntityRepository = Depends(get_repository)) -> dict:
        rows = await repo.list_active()
        return {"items": rows, "count": len(rows)}

    @router.get("/all-adm")
    async def list_all(
        repo: EntityRepository = Depends(get_repository),
        _: dict = Depends(auth_dependencies.get_current_user),
    ) -> dict:
        rows = await repo.list_all()
        return {"items": rows, "count": len(rows)}

    @router.get("/all-audit")
    async def list_audit_trail(
        entity_id: int | None = Query(default=None, ge=1),
        repo: EntityRepository = Depends(get_repository),
        _: dict = Depends(auth_dependencies.get_current_user),
    ) -> dict:
        rows = await repo.list_audit_trail(entity_id)
        return {"items": rows, "count": len(rows)}

    @router.post("/create")
    async def create(
        payload: create_schema,  # type: ignore[valid-type]
        repo: EntityRepository = Depends(get_repository),
        current_user: dict = Depends(auth_dependencies.require_admin),
    ) -> dict:
        entity_id = await repo.create(payload.model_dump(), acting_username(current_user))
        return {"ok": True, "id": entity_id}

    @router.put("/update/{entity_id}")
    async def update(
        entity_id: int,
        payload: update_schema,  # type: ignore[valid-type]
        repo: EntityRepository = Depends(get_repository),
        current_user: dict = Depends(auth_dependencies.require_admin),
    ) -> dict:
        updated = await repo.update(entity_id, payload.model_dump(), acting_username(current_user))
        if updated == 0:
            raise _not_found(kind)
        return {"ok": True, "updated": updated}

    @router.delete("/delete/{entity_id}")
    async def soft_delete(
        entity_id: int,
        repo: EntityRepository = Depends(get_repository),
        current_user: dict = Depends(auth_dependencies.require_admin),
    ) -> dict:
        deleted = await repo.soft_delete(entity_id, acting_username(current_user))
        if deleted == 0:
            raise _not_found(kind)
        return {"ok": True, "deleted": deleted}

    # Registered last so the literal paths above win over the id pattern.
    @router.get("/{entity_id}")
    async def get_one(
        entity_id: int,
        repo: EntityRepository = Depends(get_repository),
        _: dict = Depends(auth_dependencies.get_current_user),
    ) -> dict:
        row = await repo.get(entity_id)
        if row is None:
            raise _not_found(kind)
        return row

    return router
