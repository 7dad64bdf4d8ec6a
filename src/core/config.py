"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Resuelve los directorios del framework (instalación, privado, caché) en un único
  lugar para que checks y adaptadores lean las mismas rutas.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "dotkit"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    Objetivo: guardar el `.env` del usuario sin tocar el directorio del framework.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    return get_xdg_private_dir()


def get_xdg_private_dir() -> Path:
    """`$XDG_CONFIG_HOME/dotkit`, con `~/.config` como base por defecto."""

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_legacy_private_dir() -> Path:
    return Path.home() / f".{APP_NAME}.d"


def get_legacy_rc_file() -> Path:
    return Path.home() / f".{APP_NAME}rc"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# dotkit user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI, checks y adaptadores.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOTKIT_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    framework_dir: Path = Field(
        default_factory=lambda: Path.home() / f".{APP_NAME}",
        description="Instalación del framework (modules/, .local/).",
    )
    private_dir: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("DOTKIT_DIR", "private_dir"),
        description="Directorio privado del usuario (init.json). Sobrescribe la resolución XDG.",
    )

    min_python_version: str = Field(
        default="3.10",
        pattern=r"^\d+(\.\d+)*$",
        description="Versión mínima del intérprete soportada.",
    )
    min_git_version: str = Field(
        default="2.23",
        pattern=r"^\d+(\.\d+)*$",
        description="Versión mínima de git para el gestor de paquetes.",
    )

    cache_files: list[str] = Field(
        default_factory=lambda: ["history", "projects.cache"],
        description="Ficheros de caché que pueden crecer sin control.",
    )
    cache_warning_mb: float = Field(
        default=1.0,
        gt=0,
        description="Umbral (MB) a partir del cual un fichero de caché se reporta.",
    )
    required_fonts: list[str] = Field(
        default_factory=lambda: ["Symbols Nerd Font Mono"],
        description="Fuentes que los módulos de UI esperan encontrar vía fontconfig.",
    )
    builtin_packages: list[str] = Field(
        default_factory=list,
        description="Paquetes que el framework ya incluye y no hay que instalar.",
    )
    project_markers: list[str] = Field(
        default_factory=lambda: [".git", ".hg", ".project", ".projectile"],
        description="Ficheros/directorios que marcan la raíz de un proyecto.",
    )

    @property
    def local_dir(self) -> Path:
        return self.framework_dir / ".local"

    @property
    def cache_dir(self) -> Path:
        return self.local_dir / "cache"

    @property
    def packages_dir(self) -> Path:
        return self.local_dir / "packages"

    def resolved_private_dir(self) -> Path:
        """Resolución del directorio privado.

        Orden:
        1) `DOTKIT_DIR` / `private_dir`
        2) `$XDG_CONFIG_HOME/dotkit` si existe
        3) `~/.dotkit.d` si existe
        4) `$XDG_CONFIG_HOME/dotkit` (aunque no exista todavía)
        """

        if self.private_dir is not None:
            return self.private_dir.expanduser()
        xdg = get_xdg_private_dir()
        if xdg.is_dir():
            return xdg
        legacy = get_legacy_private_dir()
        if legacy.is_dir():
            return legacy
        return xdg
