"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta de `init.json` y `packages.json` sin acoplar el Core
  a la lectura de ficheros.
- Los hallazgos del doctor se pueden serializar (JSON) o renderizar (Rich) sin
  conversiones manuales.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class Severity(str, Enum):
    """Severity of a doctor message.

    Only `WARNING` and `ERROR` are accumulated; the rest are printed and dropped.
    """

    START = "start"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def accumulated(self) -> bool:
        return self in (Severity.WARNING, Severity.ERROR)


class Finding(BaseModel):
    """Un mensaje emitido por un check.

    Por qué existe:
    - Unifica la salida de los checks del Core y de los `doctor.py` de cada módulo.
    - El `scope` permite saber de qué módulo vino un aviso tras el merge.
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity = Field(..., description="Nivel del mensaje.")
    message: str = Field(..., min_length=1, description="Texto legible del hallazgo.")
    explanation: str | None = Field(
        default=None,
        description="Texto adicional con el porqué o cómo solucionarlo.",
    )
    scope: str | None = Field(
        default=None,
        description="Nombre del scope (módulo) que produjo el hallazgo, si aplica.",
    )

    def format(self) -> str:
        if self.scope:
            return f"[{self.scope}] {self.message}"
        return self.message


class ModuleEntry(BaseModel):
    """Entrada extendida de `init.json`: `{"name": "python", "flags": ["+lsp"]}`."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, pattern=r"^[A-Za-z0-9_.+-]+$")
    flags: list[str] = Field(default_factory=list)

    @field_validator("flags")
    @classmethod
    def _check_flags(cls, value: list[str]) -> list[str]:
        for flag in value:
            if not flag or flag[0] not in "+-":
                raise ValueError(f"module flags must start with '+' or '-': {flag!r}")
        return value


class InitFile(BaseModel):
    """Contenido de `init.json` en el directorio privado.

    Formato:
        {"modules": {"lang": ["python", {"name": "rust", "flags": ["+lsp"]}]}}
    """

    modules: dict[str, list[str | ModuleEntry]] = Field(default_factory=dict)

    def entries(self) -> list[tuple[str, ModuleEntry]]:
        out: list[tuple[str, ModuleEntry]] = []
        for category, items in self.modules.items():
            for item in items:
                entry = ModuleEntry(name=item) if isinstance(item, str) else item
                out.append((category, entry))
        return out


class ModuleInfo(BaseModel):
    """Un módulo habilitado y resuelto en disco."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    flags: tuple[str, ...] = Field(default_factory=tuple)
    path: Path | None = Field(
        default=None,
        description="Directorio del módulo; None si no se encontró en ninguna ruta.",
    )

    @property
    def key(self) -> str:
        return f"{self.category} {self.name}"

    @property
    def doctor_file(self) -> Path | None:
        return self.path / "doctor.py" if self.path else None

    @property
    def packages_file(self) -> Path | None:
        return self.path / "packages.json" if self.path else None


class PackageDeclaration(BaseModel):
    """Paquete de terceros declarado por un módulo en `packages.json`."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1)
    disable: bool = Field(default=False, description="Declarado pero deshabilitado.")
    ignore: bool = Field(
        default=False,
        description="El framework no lo gestiona (p.ej. lo instala el sistema).",
    )
    recipe: dict[str, str] | None = Field(
        default=None,
        description="Origen opcional (repo, branch, ...).",
    )


class PackagesFile(BaseModel):
    packages: list[PackageDeclaration] = Field(default_factory=list)


class PackageStatus(str, Enum):
    INSTALLED = "installed"
    BUILTIN = "builtin"
    DISABLED = "disabled"
    IGNORED = "ignored"
    MISSING = "missing"

    @property
    def satisfied(self) -> bool:
        return self is not PackageStatus.MISSING
