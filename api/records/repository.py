"""
Generic persistence for audited entity kinds (raw SQL).

Every mutation runs as one transaction on one connection:

1. lock and read the current row (`SELECT ... FOR UPDATE`),
2. write the entity row,
3. write the audit row through `AuditRecorder`.

Any failure rolls back all three, so an entity change never commits without
its audit row. The row lock makes concurrent mutations of the same id
serialize, and each audit row's prior values are the last committed ones.

Deletion is soft: `estado` flips to false and the row stays.

Mutating an inactive row is allowed. A second soft delete succeeds and
writes another DELETE audit row; an update may reactivate a row by sending
`estado = true`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import asyncpg

from audit.recorder import AuditRecorder, Operation
from core import db
from core.errors import NotPersisted

from .kinds import STATE_COLUMN, EntityKind

logger = logging.getLogger(__name__)


class EntityRepository:
    def __init__(
        self,
        kind: EntityKind,
        *,
        pool: asyncpg.Pool,
        recorder: AuditRecorder | None = None,
    ) -> None:
        self.kind = kind
        self._pool = pool
        self._recorder = recorder or AuditRecorder(kind)

    # Reads

    async def list_active(self) -> list[dict[str, Any]]:
        k = self.kind
        return await db.fetch_all(
            f"SELECT * FROM {k.table} WHERE {STATE_COLUMN} = true ORDER BY {k.id_column}",
            pool=self._pool,
        )

    async def list_all(self) -> list[dict[str, Any]]:
        k = self.kind
        return await db.fetch_all(
            f"SELECT * FROM {k.table} ORDER BY {k.id_column}",
            pool=self._pool,
        )

    async def list_audit_trail(self, entity_id: int | None = None) -> list[dict[str, Any]]:
        """
        Audit rows in insertion order, optionally for one entity.
        """
        k = self.kind
        if entity_id is None:
            return await db.fetch_all(
                f"SELECT * FROM {k.audit_table} ORDER BY id_audit",
                pool=self._pool,
            )
        return await db.fetch_all(
            f"SELECT * FROM {k.audit_table} WHERE {k.id_column} = $1 ORDER BY id_audit",
            entity_id,
            pool=self._pool,
        )

    async def get(self, entity_id: int) -> dict[str, Any] | None:
        k = self.kind
        return await db.fetch_one(
            f"SELECT * FROM {k.table} WHERE {k.id_column} = $1",
            entity_id,
            pool=self._pool,
        )

    # Mutations

    def _domain_values(self, fields: Mapping[str, Any]) -> list[Any]:
        missing = [name for name in self.kind.fields if name not in fields]
        if missing:
            raise ValueError(f"Missing {self.kind.name} fields: {', '.join(missing)}")
        return [fields[name] for name in self.kind.fields]

    async def _lock_current(self, conn: asyncpg.Connection, entity_id: int) -> dict[str, Any] | None:
        k = self.kind
        row = await conn.fetchrow(
            f"SELECT * FROM {k.table} WHERE {k.id_column} = $1 FOR UPDATE",
            entity_id,
        )
        return dict(row) if row is not None else None

    async def create(self, fields: Mapping[str, Any], acting_user: str) -> int:
        """
        Insert an active row and its INSERT audit row. Returns the new id.
        """
        k = self.kind
        values = self._domain_values(fields)
        columns = ", ".join(k.fields)
        placeholders = ", ".join(f"${i}" for i in range(1, len(k.fields) + 1))

        async with db.transaction(self._pool) as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO {k.table} ({columns}, {STATE_COLUMN})
                VALUES ({placeholders}, true)
                RETURNING *
                """,
                *values,
            )
            if row is None or row.get(k.id_column) is None:
                raise NotPersisted(f"Failed to insert {k.name}.")

            inserted = dict(row)
            entity_id = int(inserted[k.id_column])
            await self._recorder.record(
                conn,
                entity_id=entity_id,
                before=None,
                after=inserted,
                operation=Operation.INSERT,
                acting_user=acting_user,
            )

        logger.info("record_created kind=%s id=%s user=%s", k.name, entity_id, acting_user)
        return entity_id

    async def update(self, entity_id: int, fields: Mapping[str, Any], acting_user: str) -> int:
        """
        Overwrite every domain field (and `estado` when supplied).

        Returns rows affected: 0 when the id does not exist, 1 otherwise.
        """
        k = self.kind
        values = self._domain_values(fields)
        assignments = [f"{name} = ${i}" for i, name in enumerate(k.fields, start=1)]
        if fields.get(STATE_COLUMN) is not None:
            assignments.append(f"{STATE_COLUMN} = ${len(values) + 1}")
            values.append(bool(fields[STATE_COLUMN]))
        values.append(entity_id)

        async with db.transaction(self._pool) as conn:
            before = await self._lock_current(conn, entity_id)
            if before is None:
                logger.info("record_update_missing kind=%s id=%s user=%s", k.name, entity_id, acting_user)
                return 0

            row = await conn.fetchrow(
                f"""
                UPDATE {k.table}
                SET {', '.join(assignments)}
                WHERE {k.id_column} = ${len(values)}
                RETURNING *
                """,
                *values,
            )
            if row is None:
                return 0

            await self._recorder.record(
                conn,
                entity_id=entity_id,
                before=before,
                after=dict(row),
                operation=Operation.UPDATE,
                acting_user=acting_user,
            )

        logger.info("record_updated kind=%s id=%s user=%s", k.name, entity_id, acting_user)
        return 1

    async def soft_delete(self, entity_id: int, acting_user: str) -> int:
        """
        Mark the row inactive. Domain fields are left as they are.

        Returns rows affected: 0 when the id does not exist, 1 otherwise.
        """
        k = self.kind

        async with db.transaction(self._pool) as conn:
            before = await self._lock_current(conn, entity_id)
            if before is None:
                logger.info("record_delete_missing kind=%s id=%s user=%s", k.name, entity_id, acting_user)
                return 0

            row = await conn.fetchrow(
                f"""
                UPDATE {k.table}
                SET {STATE_COLUMN} = false
                WHERE {k.id_column} = $1
                RETURNING *
                """,
                entity_id,
            )
            if row is None:
                return 0

            await self._recorder.record(
                conn,
                entity_id=entity_id,
                before=before,
                after=dict(row),
                operation=Operation.DELETE,
                acting_user=acting_user,
            )

        logger.info(
            "record_soft_deleted kind=%s id=%s user=%s was_active=%s",
            k.name,
            entity_id,
            acting_user,
            before.get(STATE_COLUMN),
        )
        return 1
