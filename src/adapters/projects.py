"""Detección de la raíz de proyecto por ficheros marcadores (.git, .projectile, ...)."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class MarkerProjectResolver:
    """Bottom-up search: the nearest ancestor holding a marker is the root."""

    def __init__(self, markers: Iterable[str]) -> None:
        self._markers = tuple(markers)

    def root_for(self, path: Path) -> Path | None:
        start = path.expanduser()
        for candidate in (start, *start.parents):
            if any((candidate / marker).exists() for marker in self._markers):
                return candidate
        return None
