"""
Course-section assignments (tb_curso_seccion): which course is taught in
which section, by which employee, in which period.
"""
