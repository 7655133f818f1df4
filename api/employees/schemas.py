"""
Pydantic schemas for employee endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class EmployeeCreate(BaseModel):
    dni: str = Field(..., min_length=8, max_length=12)
    nombres: str = Field(..., min_length=1, max_length=100)
    apellidos: str = Field(..., min_length=1, max_length=100)
    cargo: str = Field(..., min_length=1, max_length=60)
    correo: str | None = Field(default=None, max_length=320)
    telefono: str | None = Field(default=None, max_length=20)


class EmployeeUpdate(EmployeeCreate):
    estado: bool | None = None
