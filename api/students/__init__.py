"""
Students (tb_estudiante).
"""
