"""Contratos de los registros del framework.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los checks solo enumeran/consultan; cómo se descubren módulos y paquetes es
  un detalle de los adaptadores.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import ModuleInfo, PackageDeclaration, PackageStatus


@runtime_checkable
class ModuleRegistry(Protocol):
    """Enumera los módulos habilitados del framework.

    Reglas de diseño:
    - `list` puede lanzar `FrameworkInitError` si el estado del framework no carga.
    - El orden devuelto es el orden de declaración en `init.json`.
    """

    def list(self) -> list[ModuleInfo]:
        ...

    def enabled(self, category: str, name: str) -> bool:
        ...


@runtime_checkable
class PackageRegistry(Protocol):
    """Consulta los paquetes declarados por cada módulo y su estado."""

    def declared(self, module: ModuleInfo) -> list[PackageDeclaration]:
        ...

    def status(self, declaration: PackageDeclaration) -> PackageStatus:
        ...


@runtime_checkable
class ProjectResolver(Protocol):
    def root_for(self, path: Path) -> Path | None:
        """Raíz del proyecto que contiene `path`, o None."""

        ...
