"""Excepciones del Core.

Por qué una jerarquía propia:
- La CLI puede distinguir fallos del framework de errores de E/S normales.
- El doctor convierte `FrameworkInitError` en un error de nivel superior.
"""

from __future__ import annotations


class DotkitError(Exception):
    """Base para los errores propios de dotkit."""


class FrameworkInitError(DotkitError):
    """The framework state (init.json, module registry) could not be loaded."""


class RecordsExhausted(DotkitError, EOFError):
    """A file ran out of structured records before the requested count."""

    def __init__(self, path: object, wanted: int, found: int) -> None:
        super().__init__(f"{path}: expected {wanted} record(s), found {found}")
        self.path = path
        self.wanted = wanted
        self.found = found
