"""
Pydantic schemas for grade endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class GradeCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=100)
    # e.g. "Inicial", "Primaria", "Secundaria"
    nivel: str = Field(..., min_length=1, max_length=50)
    descripcion: str | None = Field(default=None, max_length=500)


class GradeUpdate(GradeCreate):
    estado: bool | None = None
