"""Carga del `doctor.py` de un módulo.

Contrato del script:
- Define `check(doctor)`; `doctor` es un `ModuleDoctor` con warn/error/info/explain.
- Importar el script no debe tener efectos; todo ocurre dentro de `check`.
"""

from __future__ import annotations

import importlib.util
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

_UNSAFE_CHARS_RE = re.compile(r"[^0-9A-Za-z_]")


def _module_name(path: Path) -> str:
    stem = _UNSAFE_CHARS_RE.sub("_", f"{path.parent.parent.name}_{path.parent.name}")
    return f"dotkit_module_doctor_{stem}"


def load_module_check(path: Path) -> Callable[[Any], Any] | None:
    """Import `path` and return its `check` callable (None if it has none).

    Raises FileNotFoundError for a missing file and SyntaxError for a broken one.
    """

    if not path.is_file():
        raise FileNotFoundError(f"Cannot open doctor script: {path}")
    spec = importlib.util.spec_from_file_location(_module_name(path), path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load doctor script {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    check = getattr(module, "check", None)
    return check if callable(check) else None


def run_module_doctor(path: Path, doctor: Any) -> bool:
    """Run the module's `check(doctor)`; False when the script defines none."""

    check = load_module_check(path)
    if check is None:
        return False
    check(doctor)
    return True
