"""
Entity kind descriptors.

An `EntityKind` names the tables and columns the generic repository and the
audit recorder need for one tracked record type. The concrete kinds live in
their feature packages (`sections/`, `grades/`, ...).
"""

from __future__ import annotations

from dataclasses import dataclass

STATE_COLUMN = "estado"


@dataclass(frozen=True)
class EntityKind:
    name: str
    label: str
    table: str
    id_column: str
    fields: tuple[str, ...]
    audit_table: str

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError(f"Entity kind {self.name!r} has no domain fields.")
        if STATE_COLUMN in self.fields or self.id_column in self.fields:
            raise ValueError(
                f"Entity kind {self.name!r}: id and state columns are not domain fields."
            )

    @property
    def columns(self) -> tuple[str, ...]:
        """Domain fields followed by the state column."""
        return self.fields + (STATE_COLUMN,)

    @property
    def audit_columns(self) -> tuple[str, ...]:
        pairs: list[str] = []
        for column in self.columns:
            pairs.append(f"{column}_anterior")
            pairs.append(f"{column}_nuevo")
        return (self.id_column, *pairs, "operacion", "fecha_modificacion", "usuario_modificador")
