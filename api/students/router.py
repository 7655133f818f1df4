"""
Student API endpoints.
"""

from __future__ import annotations

from records.router import build_router

from . import schemas
from .repository import STUDENT

router = build_router(
    STUDENT,
    create_schema=schemas.StudentCreate,
    update_schema=schemas.StudentUpdate,
)
