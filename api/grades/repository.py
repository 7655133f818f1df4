"""
Grade persistence.
"""

from __future__ import annotations

from records.kinds import EntityKind

GRADE = EntityKind(
    name="grado",
    label="Grade",
    table="tb_grado",
    id_column="id_grado",
    fields=("nombre", "nivel", "descripcion"),
    audit_table="tb_audit_grado",
)
