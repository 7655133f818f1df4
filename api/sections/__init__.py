"""
Class sections (tb_seccion).
"""
