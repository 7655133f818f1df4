"""
Grade API endpoints.

Besides the shared routes, grades keep the state-only deletion route used by
existing clients: `PUT /grado/eliminar/estado/{id}`, an alias of soft delete.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException

from auth import dependencies as auth_dependencies
from records.repository import EntityRepository
from records.router import acting_username, build_router, repository_dependency

from . import schemas
from .repository import GRADE

router = build_router(
    GRADE,
    create_schema=schemas.GradeCreate,
    update_schema=schemas.GradeUpdate,
)


@router.put("/eliminar/estado/{grade_id}")
async def deactivate_grade(
    grade_id: int,
    repo: EntityRepository = Depends(repository_dependency(GRADE)),
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    deleted = await repo.soft_delete(grade_id, acting_username(current_user))
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Grade not found.")
    return {"ok": True, "deleted": deleted}
