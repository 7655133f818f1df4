"""
Employee API endpoints.
"""

from __future__ import annotations

from records.router import build_router

from . import schemas
from .repository import EMPLOYEE

router = build_router(
    EMPLOYEE,
    create_schema=schemas.EmployeeCreate,
    update_schema=schemas.EmployeeUpdate,
)
