"""
Section persistence: table layout for the generic audited repository.
"""

from __future__ import annotations

from records.kinds import EntityKind

SECTION = EntityKind(
    name="seccion",
    label="Section",
    table="tb_seccion",
    id_column="id_seccion",
    fields=("aula", "grado", "nombre", "periodo"),
    audit_table="tb_audit_seccion",
)
