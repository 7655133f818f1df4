"""
Course-section API endpoints.
"""

from __future__ import annotations

from records.router import build_router

from . import schemas
from .repository import COURSE_SECTION

router = build_router(
    COURSE_SECTION,
    create_schema=schemas.CourseSectionCreate,
    update_schema=schemas.CourseSectionUpdate,
)
