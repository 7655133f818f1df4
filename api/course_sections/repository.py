from __future__ import annotations

from records.kinds import EntityKind

COURSE_SECTION = EntityKind(
    name="curso_seccion",
    label="Course-section",
    table="tb_curso_seccion",
    id_column="id_curso_seccion",
    fields=("id_curso", "id_seccion", "id_empleado", "periodo"),
    audit_table="tb_audit_curso_seccion",
)
