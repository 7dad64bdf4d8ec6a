"""Helpers de rutas: construcción, globbing, tamaños y chequeos de existencia."""

from __future__ import annotations

import glob as _glob
import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from core.interfaces.process import ProcessRunner

logger = logging.getLogger(__name__)

_DU_LINE_RE = re.compile(r"^(\d+)\s+", re.MULTILINE)


def path(*segments: str | os.PathLike[str]) -> Path:
    """Join `segments` into an absolute, normalized path.

    `~` and environment variables are expanded. The filesystem is not touched,
    so symlinks are left alone.
    """

    if not segments:
        return Path.cwd()
    joined = os.path.join(*(os.path.expandvars(os.path.expanduser(os.fspath(s))) for s in segments))
    return Path(os.path.normpath(os.path.abspath(joined)))


def expand_glob(*segments: str | os.PathLike[str]) -> list[Path]:
    """Expand shell wildcards in the joined `segments`; sorted, possibly empty."""

    pattern = str(path(*segments))
    if not _glob.has_magic(pattern):
        candidate = Path(pattern)
        return [candidate] if candidate.exists() else []
    return sorted(Path(p) for p in _glob.glob(pattern, recursive=True))


def file_size(target: str | os.PathLike[str]) -> int | None:
    """Size in bytes of `target`, or None if it does not exist."""

    try:
        return os.stat(target).st_size
    except FileNotFoundError:
        return None


def directory_size(
    *dirs: str | os.PathLike[str],
    runner: ProcessRunner | None = None,
) -> int | None:
    """Total size of `dirs` in KiB, measured with `du -sk`.

    Returns None when `du` is unavailable or exits with an error.
    """

    if not dirs:
        return 0
    if runner is None:
        from core.process import call_process

        runner = call_process

    result = runner("du", "-sk", *(os.fspath(d) for d in dirs))
    if not result.ok:
        logger.debug("du failed (%d): %s", result.status, result.stderr)
        return None
    sizes = [int(match) for match in _DU_LINE_RE.findall(result.stdout)]
    if not sizes:
        return None
    return sum(sizes)


@dataclass(frozen=True, init=False)
class AllOf:
    """Every nested form must exist; evaluates to the last match."""

    forms: tuple[ExistsForm, ...]

    def __init__(self, *forms: ExistsForm) -> None:
        object.__setattr__(self, "forms", forms)


@dataclass(frozen=True, init=False)
class AnyOf:
    """The first nested form that exists wins."""

    forms: tuple[ExistsForm, ...]

    def __init__(self, *forms: ExistsForm) -> None:
        object.__setattr__(self, "forms", forms)


ExistsForm = Union[str, os.PathLike, AllOf, AnyOf]
ExistsCheck = Callable[[], Union[Path, None]]


def build_exists_check(
    form: ExistsForm,
    directory: str | os.PathLike[str] | None = None,
) -> ExistsCheck:
    """Compile `form` into a reusable predicate.

    Strings and paths are resolved against `directory` (the working directory
    when omitted). The predicate returns the matched path or None.
    """

    if isinstance(form, AllOf):
        checks = [build_exists_check(f, directory) for f in form.forms]

        def _all() -> Path | None:
            last: Path | None = None
            for check in checks:
                last = check()
                if last is None:
                    return None
            return last

        return _all

    if isinstance(form, AnyOf):
        checks = [build_exists_check(f, directory) for f in form.forms]

        def _any() -> Path | None:
            for check in checks:
                found = check()
                if found is not None:
                    return found
            return None

        return _any

    if isinstance(form, (str, os.PathLike)):
        target = path(directory, form) if directory is not None else path(form)

        def _exists() -> Path | None:
            return target if target.exists() else None

        return _exists

    raise TypeError(f"unsupported existence form: {form!r}")


def file_exists(
    form: ExistsForm,
    directory: str | os.PathLike[str] | None = None,
) -> Path | None:
    return build_exists_check(form, directory)()
