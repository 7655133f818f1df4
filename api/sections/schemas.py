"""
Pydantic schemas for section endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SectionCreate(BaseModel):
    aula: str = Field(..., min_length=1, max_length=50)
    # References tb_grado.id_grado.
    grado: int = Field(..., ge=1)
    nombre: str = Field(..., min_length=1, max_length=100)
    periodo: int = Field(..., ge=1900, le=2100)


class SectionUpdate(SectionCreate):
    estado: bool | None = None
