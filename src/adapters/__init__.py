"""Adaptadores: implementaciones concretas de los contratos del Core.

Por qué un paquete aparte:
- Aquí vive todo lo que toca el disco del framework (init.json, packages.json,
  doctor.py de cada módulo) y la detección de proyectos.
"""
