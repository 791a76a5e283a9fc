"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) que
  describen un ads.txt parseado y un sellers.json ya descargado.
- El dominio no conoce HTTP, CLI ni almacenamiento: solo conceptos del problema.
"""
