from __future__ import annotations

from records.kinds import EntityKind

STUDENT = EntityKind(
    name="estudiante",
    label="Student",
    table="tb_estudiante",
    id_column="id_estudiante",
    fields=(
        "dni",
        "nombres",
        "apellidos",
        "fecha_nacimiento",
        "direccion",
        "telefono",
        "id_seccion",
    ),
    audit_table="tb_audit_estudiante",
)
