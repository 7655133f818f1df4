"""
Pydantic schemas for student endpoints.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class StudentCreate(BaseModel):
    dni: str = Field(..., min_length=8, max_length=12)
    nombres: str = Field(..., min_length=1, max_length=100)
    apellidos: str = Field(..., min_length=1, max_length=100)
    fecha_nacimiento: date
    direccion: str | None = Field(default=None, max_length=200)
    telefono: str | None = Field(default=None, max_length=20)
    # Section the student is enrolled in, if any.
    id_seccion: int | None = Field(default=None, ge=1)


class StudentUpdate(StudentCreate):
    estado: bool | None = None
