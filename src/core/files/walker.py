"""Listado recursivo y filtrado de directorios.

Por qué BFS y no recursión:
- Las entradas menos profundas salen antes que las más profundas.
- La profundidad queda acotada por la cola, no por la pila de Python; con
  `follow_symlinks=True` un guard de (dev, inode) sobre los ancestros corta
  los ciclos sin ocultar directorios alcanzables por dos caminos.
"""

from __future__ import annotations

import logging
import os
import re
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any

from core.files.paths import path as _abspath

logger = logging.getLogger(__name__)

DEFAULT_MATCH = r"/[^._][^/]+"
DEFAULT_DEPTH = 99999


class EntryType(str, Enum):
    """Tipo de entradas a devolver."""

    FILES = "files"
    DIRS = "dirs"
    ALL = "all"

    @property
    def files(self) -> bool:
        return self in (EntryType.FILES, EntryType.ALL)

    @property
    def dirs(self) -> bool:
        return self in (EntryType.DIRS, EntryType.ALL)


@dataclass(frozen=True)
class WalkSpec:
    """Parámetros inmutables de un recorrido."""

    roots: tuple[Path, ...]
    match: re.Pattern[str]
    glob: str = "*"
    depth: int = DEFAULT_DEPTH
    mindepth: int = 0
    type: EntryType = EntryType.FILES
    exclude: Callable[[Path], bool] | None = None
    transform: Callable[[Path], Any] | None = None
    follow_symlinks: bool = True
    relative_to: Path | None = None

    @property
    def dirs_only_glob(self) -> bool:
        return self.glob.endswith("/")


def _wants(spec: WalkSpec, entry: Path, *, is_dir: bool, mindepth: int) -> bool:
    if is_dir and not spec.type.dirs:
        return False
    if not is_dir and not spec.type.files:
        return False
    if mindepth > 0:
        return False
    candidate = f"/{entry.name}/" if is_dir else f"/{entry.name}"
    if not spec.match.search(candidate):
        return False
    if spec.exclude is not None and spec.exclude(entry):
        return False
    return True


def _children(spec: WalkSpec, directory: Path) -> list[os.DirEntry[str]]:
    pattern = spec.glob.rstrip("/") or "*"
    try:
        with os.scandir(directory) as it:
            entries = [e for e in it if fnmatchcase(e.name, pattern)]
    except OSError as exc:
        logger.debug("cannot scan %s: %s", directory, exc)
        return []
    entries.sort(key=lambda e: e.name)
    if spec.dirs_only_glob:
        entries = [e for e in entries if e.is_dir(follow_symlinks=spec.follow_symlinks)]
    return entries


def _walk_root(spec: WalkSpec, root: Path) -> list[Path]:
    result: list[Path] = []
    if not root.is_dir():
        return result

    try:
        st = root.stat()
    except OSError:
        return result

    # Each queued directory carries the (dev, inode) keys of its ancestors.
    queue: deque[tuple[Path, int, int, frozenset[tuple[int, int]]]] = deque(
        [(root, spec.depth, spec.mindepth, frozenset({(st.st_dev, st.st_ino)}))]
    )
    while queue:
        directory, depth, mindepth, ancestors = queue.popleft()
        for entry in _children(spec, directory):
            entry_path = Path(entry.path)
            is_link = entry.is_symlink()
            if entry.is_dir(follow_symlinks=True):
                if is_link and not spec.follow_symlinks:
                    continue
                if _wants(spec, entry_path, is_dir=True, mindepth=mindepth):
                    result.append(entry_path)
                if depth > 1:
                    try:
                        st = entry_path.stat()
                    except OSError:
                        continue
                    key = (st.st_dev, st.st_ino)
                    if key in ancestors:
                        continue
                    queue.append((entry_path, depth - 1, mindepth - 1, ancestors | {key}))
            elif _wants(spec, entry_path, is_dir=False, mindepth=mindepth):
                result.append(entry_path)
    return result


def _relativize(paths: list[Path], relative_to: Path | None) -> list[Path]:
    if relative_to is None:
        return paths
    base = str(relative_to)
    return [Path(os.path.relpath(p, base)) for p in paths]


def walk(spec: WalkSpec) -> list[Any]:
    """Ejecuta `spec` y devuelve la lista final (transformada si aplica)."""

    found: list[Path] = []
    for root in spec.roots:
        found.extend(_walk_root(spec, root))
    found = _relativize(found, spec.relative_to)
    if spec.transform is not None:
        return [spec.transform(p) for p in found]
    return found


def files_in(
    paths: str | os.PathLike[str] | Iterable[str | os.PathLike[str]],
    *,
    match: str | re.Pattern[str] = DEFAULT_MATCH,
    glob: str = "*",
    depth: int = DEFAULT_DEPTH,
    mindepth: int = 0,
    type: EntryType | str = EntryType.FILES,
    exclude: Callable[[Path], bool] | None = None,
    transform: Callable[[Path], Any] | None = None,
    follow_symlinks: bool = True,
    full: bool = False,
    relative_to: str | os.PathLike[str] | None = None,
) -> list[Any]:
    """Return the entries under `paths` that satisfy every filter.

    `match` is a regex searched against ``"/" + name`` (with a trailing ``/``
    for directories); the default skips names starting with ``.`` or ``_``.
    `depth` counts listed levels (values below 1 behave like 1) and
    `mindepth` drops the first levels. `exclude` receives absolute paths and
    rejects entries when it returns True.

    With `full=True` paths are absolute. Otherwise they are made relative to
    `relative_to`, or to the working directory when a single root is given;
    several roots without `relative_to` produce absolute paths.
    """

    if isinstance(paths, (str, os.PathLike)):
        roots: tuple[Path, ...] = (_abspath(paths),)
    else:
        roots = tuple(_abspath(p) for p in paths)

    if full:
        base = None
    elif relative_to is not None:
        base = _abspath(relative_to)
    elif len(roots) == 1:
        base = Path.cwd()
    else:
        base = None

    spec = WalkSpec(
        roots=roots,
        match=re.compile(match) if isinstance(match, str) else match,
        glob=glob,
        depth=depth,
        mindepth=mindepth,
        type=EntryType(type),
        exclude=exclude,
        transform=transform,
        follow_symlinks=follow_symlinks,
        relative_to=base,
    )
    return walk(spec)
