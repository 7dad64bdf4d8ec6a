"""Registro de paquetes: declaraciones (`packages.json`) y estado en disco.

Un paquete cuenta como instalado si existe `<framework>/.local/packages/<name>/`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from core.domain.models import ModuleInfo, PackageDeclaration, PackagesFile, PackageStatus


def load_packages_file(path: Path) -> PackagesFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return PackagesFile.model_validate(data)


class LocalPackageRegistry:
    """Implementa `core.interfaces.registry.PackageRegistry`."""

    def __init__(self, packages_dir: Path, builtin: Iterable[str] = ()) -> None:
        self._packages_dir = packages_dir
        self._builtin = frozenset(builtin)

    def declared(self, module: ModuleInfo) -> list[PackageDeclaration]:
        packages_file = module.packages_file
        if packages_file is None or not packages_file.is_file():
            return []
        return list(load_packages_file(packages_file).packages)

    def status(self, declaration: PackageDeclaration) -> PackageStatus:
        if declaration.disable:
            return PackageStatus.DISABLED
        if declaration.ignore:
            return PackageStatus.IGNORED
        if declaration.name in self._builtin:
            return PackageStatus.BUILTIN
        if (self._packages_dir / declaration.name).is_dir():
            return PackageStatus.INSTALLED
        return PackageStatus.MISSING
