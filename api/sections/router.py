"""
Section API endpoints.
"""

from __future__ import annotations

from records.router import build_router

from . import schemas
from .repository import SECTION

router = build_router(
    SECTION,
    create_schema=schemas.SectionCreate,
    update_schema=schemas.SectionUpdate,
)
