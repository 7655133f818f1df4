"""
Audit trail writer.

One immutable row per mutation event, written on the caller's connection so
it commits or rolls back together with the entity change it describes.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

import asyncpg

from core.errors import AuditWriteFailure
from records.kinds import EntityKind

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


def _placeholders(count: int) -> str:
    return ", ".join(f"${i}" for i in range(1, count + 1))


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class AuditRecorder:
    def __init__(self, kind: EntityKind) -> None:
        self.kind = kind
        columns = kind.audit_columns
        self._insert_sql = (
            f"INSERT INTO {kind.audit_table} ({', '.join(columns)}) "
            f"VALUES ({_placeholders(len(columns))})"
        )

    def build_values(
        self,
        *,
        entity_id: int,
        before: Mapping[str, Any] | None,
        after: Mapping[str, Any] | None,
        operation: Operation,
        acting_user: str,
        when: date | None = None,
    ) -> list[Any]:
        """
        Positional values matching `EntityKind.audit_columns`.

        A missing `before` / `after` snapshot yields nulls for every
        `*_anterior` / `*_nuevo` column.
        """
        values: list[Any] = [entity_id]
        for column in self.kind.columns:
            values.append(before.get(column) if before is not None else None)
            values.append(after.get(column) if after is not None else None)
        values.append(Operation(operation).value)
        values.append(when or utc_today())
        values.append(acting_user)
        return values

    async def record(
        self,
        conn: asyncpg.Connection,
        *,
        entity_id: int,
        before: Mapping[str, Any] | None,
        after: Mapping[str, Any] | None,
        operation: Operation,
        acting_user: str,
    ) -> None:
        values = self.build_values(
            entity_id=entity_id,
            before=before,
            after=after,
            operation=operation,
            acting_user=acting_user,
        )
        try:
            await conn.execute(self._insert_sql, *values)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
            # Not logged here; the BackendError handler in main.py logs it.
            raise AuditWriteFailure(
                f"Failed to record {self.kind.name} audit row "
                f"(id={entity_id} operation={Operation(operation).value} user={acting_user}): {exc}"
            ) from exc

        logger.debug(
            "audit_recorded kind=%s id=%s operation=%s user=%s",
            self.kind.name,
            entity_id,
            Operation(operation).value,
            acting_user,
        )
