"""
Auth persistence helpers.
"""

from __future__ import annotations

from core import db


def normalize_username(usuario: str) -> str:
    return (usuario or "").strip()


async def get_user_by_username(usuario: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, usuario, password_hash, rol, is_active, created_at
        FROM usuarios
        WHERE usuario = $1
        """,
        normalize_username(usuario),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, usuario, password_hash, rol, is_active, created_at
        FROM usuarios
        WHERE id = $1
        """,
        user_id,
    )
