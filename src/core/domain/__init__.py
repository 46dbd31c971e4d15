"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2), las
  estrategias de escape y la jerarquía de errores.
- El dominio no conoce subprocess, CLI ni plantillas: solo conceptos del
  problema.
"""
