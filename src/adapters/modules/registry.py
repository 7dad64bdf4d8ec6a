"""Registro de módulos basado en disco.

Formato (`init.json` en el directorio privado):
    {"modules": {"lang": ["python", {"name": "rust", "flags": ["+lsp"]}]}}

Cada módulo se busca en `<private>/modules/<category>/<name>` y después en
`<framework>/modules/<category>/<name>`; la primera ruta existente gana.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from core.domain.models import InitFile, ModuleInfo
from core.errors import FrameworkInitError

logger = logging.getLogger(__name__)

INIT_FILENAME = "init.json"


def load_init_file(path: Path) -> InitFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return InitFile.model_validate(data)


class FilesystemModuleRegistry:
    """Implementa `core.interfaces.registry.ModuleRegistry` sobre el disco."""

    def __init__(self, private_dir: Path, module_dirs: Sequence[Path]) -> None:
        self._private_dir = private_dir
        self._module_dirs = tuple(module_dirs)
        self._modules: list[ModuleInfo] | None = None

    @property
    def init_file(self) -> Path:
        return self._private_dir / INIT_FILENAME

    def _locate(self, category: str, name: str) -> Path | None:
        for base in self._module_dirs:
            candidate = base / category / name
            if candidate.is_dir():
                return candidate
        return None

    def list(self) -> list[ModuleInfo]:
        if self._modules is not None:
            return list(self._modules)

        if not self.init_file.is_file():
            logger.debug("no %s in %s", INIT_FILENAME, self._private_dir)
            self._modules = []
            return []

        try:
            init = load_init_file(self.init_file)
        except (OSError, json.JSONDecodeError) as exc:
            raise FrameworkInitError(f"could not read {self.init_file}: {exc}") from exc
        except ValidationError as exc:
            raise FrameworkInitError(
                f"invalid {self.init_file}: {exc.error_count()} validation error(s)\n{exc}"
            ) from exc

        modules: list[ModuleInfo] = []
        seen: set[tuple[str, str]] = set()
        for category, entry in init.entries():
            key = (category, entry.name)
            if key in seen:
                continue
            seen.add(key)
            modules.append(
                ModuleInfo(
                    category=category,
                    name=entry.name,
                    flags=tuple(entry.flags),
                    path=self._locate(category, entry.name),
                )
            )
        self._modules = modules
        return list(modules)

    def enabled(self, category: str, name: str) -> bool:
        return any(m.category == category and m.name == name for m in self.list())
