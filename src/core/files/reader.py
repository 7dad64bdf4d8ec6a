"""Lectura de ficheros con distintos modos de consumo.

Registros estructurados:
- Un fichero de registros es una secuencia de documentos JSON separados por
  espacios en blanco (típicamente uno por línea), tal como los escribe
  `core.files.writer.write_file`.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any, TextIO, Union, cast

from core.errors import RecordsExhausted


class ReadMode(str, Enum):
    TEXT = "text"
    INSERT = "insert"
    RECORD = "record"
    ALL = "all"


ReadBy = Union[ReadMode, int, Callable[[Any], Any]]

_decoder = json.JSONDecoder()


def iter_records(text: str) -> Iterator[Any]:
    """Yield each JSON document in `text`, in order."""

    index = 0
    length = len(text)
    while True:
        while index < length and text[index].isspace():
            index += 1
        if index >= length:
            return
        value, index = _decoder.raw_decode(text, index)
        yield value


def _take(text: str, count: int, source: object) -> list[Any]:
    records: list[Any] = []
    for record in iter_records(text):
        if len(records) == count:
            break
        records.append(record)
    if len(records) < count:
        raise RecordsExhausted(source, count, len(records))
    return records


def _empty(by: ReadBy, encoding: str | None, sink: TextIO | None) -> Any:
    blank: str | bytes = "" if encoding else b""
    if by is ReadMode.TEXT:
        return blank
    if by is ReadMode.INSERT:
        return sink
    if by is ReadMode.RECORD:
        return None
    if by is ReadMode.ALL or isinstance(by, int):
        return []
    return by(blank)


def read_file(
    file: str | os.PathLike[str],
    *,
    by: ReadBy = ReadMode.TEXT,
    encoding: str | None = "utf-8",
    missing_ok: bool = False,
    sink: TextIO | None = None,
) -> Any:
    """Read `file` and return its contents as selected by `by`.

    - `ReadMode.TEXT`: the whole decoded text (`bytes` when `encoding` is None).
    - `ReadMode.INSERT`: write the text into `sink` and return `sink`.
    - `ReadMode.RECORD`: the first structured record.
    - an `int` N: the first N records (`RecordsExhausted` if there are fewer).
    - `ReadMode.ALL`: every record until the end of the file.
    - a callable: called with the decoded contents; its result is returned.

    A missing file raises `FileNotFoundError`, unless `missing_ok` is set, in
    which case the mode's empty value is returned.
    """

    if isinstance(by, str) and not isinstance(by, ReadMode):
        by = ReadMode(by)
    if isinstance(by, bool) or (isinstance(by, int) and by < 0):
        raise ValueError(f"invalid record count: {by!r}")
    if by is ReadMode.INSERT and sink is None:
        raise ValueError("ReadMode.INSERT requires a sink")
    wants_records = by in (ReadMode.RECORD, ReadMode.ALL) or isinstance(by, int)
    if wants_records and encoding is None:
        raise ValueError("structured records need a text encoding")

    try:
        if encoding is None:
            with open(file, "rb") as handle:
                content: str | bytes = handle.read()
        else:
            with open(file, "r", encoding=encoding, newline="") as handle:
                content = handle.read()
    except FileNotFoundError:
        if missing_ok:
            return _empty(by, encoding, sink)
        raise

    if by is ReadMode.TEXT:
        return content
    if by is ReadMode.INSERT:
        target = cast(TextIO, sink)
        target.write(content if isinstance(content, str) else content.decode("utf-8"))
        return target
    if callable(by):
        return by(content)

    # Record modes were rejected above for binary reads.
    text = cast(str, content)
    if by is ReadMode.RECORD:
        return _take(text, 1, file)[0]
    if by is ReadMode.ALL:
        return list(iter_records(text))
    return _take(text, cast(int, by), file)
