"""Escritura de ficheros a partir de una lista de contenidos heterogéneos."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from pydantic import BaseModel


@contextmanager
def file_modes(mode: int | None) -> Iterator[None]:
    """Create files and directories with at most `mode` permissions.

    Sets the process umask to the complement of `mode` and restores the
    previous one on exit. `None` leaves the umask untouched.
    """

    if mode is None:
        yield
        return
    previous = os.umask(~mode & 0o777)
    try:
        yield
    finally:
        os.umask(previous)


def _render(item: Any, encoding: str) -> bytes:
    if isinstance(item, str):
        return item.encode(encoding)
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, BaseModel):
        item = item.model_dump(mode="json")
    return (json.dumps(item, ensure_ascii=False, sort_keys=True) + "\n").encode(encoding)


def write_file(
    file: str | os.PathLike[str],
    *contents: Any,
    encoding: str | None = "utf-8",
    mode: int | None = None,
    mkdir: bool = False,
    append: bool = False,
) -> Path:
    """Write `contents` to `file` in order and return its path.

    Strings are written verbatim and bytes-like items as pre-rendered buffers.
    Anything else (pydantic models included) becomes one JSON record followed
    by a newline, readable back with `read_file(..., by=ReadMode.ALL)`.
    `encoding=None` writes strings as UTF-8 without further transcoding.
    """

    target = Path(file)
    # Rendering first: a non-serializable item must not truncate the file.
    payload = b"".join(_render(item, encoding or "utf-8") for item in contents)

    with file_modes(mode):
        if mkdir:
            target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "ab" if append else "wb") as handle:
            handle.write(payload)
    return target
