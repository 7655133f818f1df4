"""
Employee persistence (instructors and staff).
"""

from __future__ import annotations

from records.kinds import EntityKind

EMPLOYEE = EntityKind(
    name="empleado",
    label="Employee",
    table="tb_empleado",
    id_column="id_empleado",
    fields=("dni", "nombres", "apellidos", "cargo", "correo", "telefono"),
    audit_table="tb_audit_empleado",
)
