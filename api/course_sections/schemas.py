"""
Pydantic schemas for course-section endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CourseSectionCreate(BaseModel):
    id_curso: int = Field(..., ge=1)
    id_seccion: int = Field(..., ge=1)
    # Instructor assigned to the course; may be filled in later.
    id_empleado: int | None = Field(default=None, ge=1)
    periodo: int = Field(..., ge=1900, le=2100)


class CourseSectionUpdate(CourseSectionCreate):
    estado: bool | None = None
