from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from core.domain.models import ModuleEntry
from core.errors import RecordsExhausted
from core.files import ReadMode, file_modes, read_file, write_file


def test_text_round_trip(tmp_path: Path) -> None:
    target = write_file(tmp_path / "notes.txt", "hola\n", "mundo ✓\n")

    assert target == tmp_path / "notes.txt"
    assert read_file(target) == "hola\nmundo ✓\n"


def test_append_keeps_existing_contents(tmp_path: Path) -> None:
    target = tmp_path / "log.txt"
    write_file(target, "one\n")
    write_file(target, "two\n", append=True)

    assert read_file(target) == "one\ntwo\n"


def test_mkdir_creates_parents(tmp_path: Path) -> None:
    target = write_file(tmp_path / "a" / "b" / "c.txt", "x", mkdir=True)
    assert target.read_text(encoding="utf-8") == "x"


def test_missing_parent_without_mkdir_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        write_file(tmp_path / "nope" / "c.txt", "x")


def test_records_are_read_back_in_order(tmp_path: Path) -> None:
    target = write_file(
        tmp_path / "records.json",
        {"b": 1, "a": [1, 2]},
        ModuleEntry(name="python", flags=["+lsp"]),
        3,
    )

    assert read_file(target, by=ReadMode.ALL) == [
        {"a": [1, 2], "b": 1},
        {"name": "python", "flags": ["+lsp"]},
        3,
    ]
    assert read_file(target, by=ReadMode.RECORD) == {"a": [1, 2], "b": 1}
    assert read_file(target, by=2)[1]["name"] == "python"


def test_asking_for_too_many_records_raises(tmp_path: Path) -> None:
    target = write_file(tmp_path / "records.json", {"a": 1})

    with pytest.raises(RecordsExhausted):
        read_file(target, by=2)
    with pytest.raises(EOFError):
        read_file(tmp_path / "records.json", by=5)


def test_first_record_of_empty_file_raises(tmp_path: Path) -> None:
    target = write_file(tmp_path / "empty.json")

    with pytest.raises(RecordsExhausted):
        read_file(target, by=ReadMode.RECORD)
    assert read_file(target, by=ReadMode.ALL) == []
    assert read_file(target, by=0) == []


def test_insert_writes_into_sink(tmp_path: Path) -> None:
    target = write_file(tmp_path / "x.txt", "payload")
    sink = io.StringIO("> ")
    sink.seek(2)

    assert read_file(target, by=ReadMode.INSERT, sink=sink) is sink
    assert sink.getvalue() == "> payload"


def test_callable_receives_contents(tmp_path: Path) -> None:
    target = write_file(tmp_path / "lines.txt", "a\nb\nc\n")
    assert read_file(target, by=str.splitlines) == ["a", "b", "c"]


def test_binary_read(tmp_path: Path) -> None:
    target = write_file(tmp_path / "blob", b"\x00\x01", "é")

    assert read_file(target, encoding=None) == b"\x00\x01" + "é".encode("utf-8")
    with pytest.raises(ValueError):
        read_file(target, by=ReadMode.ALL, encoding=None)


def test_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "nope"

    with pytest.raises(FileNotFoundError):
        read_file(missing)
    assert read_file(missing, missing_ok=True) == ""
    assert read_file(missing, by="all", missing_ok=True) == []
    assert read_file(missing, by=ReadMode.RECORD, missing_ok=True) is None


def test_invalid_modes_are_rejected(tmp_path: Path) -> None:
    target = write_file(tmp_path / "x.txt", "x")

    with pytest.raises(ValueError):
        read_file(target, by=-1)
    with pytest.raises(ValueError):
        read_file(target, by=ReadMode.INSERT)
    with pytest.raises(ValueError):
        read_file(target, by="lines")


def test_unserializable_content_leaves_file_untouched(tmp_path: Path) -> None:
    target = write_file(tmp_path / "keep.txt", "original")

    with pytest.raises(TypeError):
        write_file(target, "new", object())
    assert read_file(target) == "original"


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_mode_limits_permissions_and_restores_umask(tmp_path: Path) -> None:
    before = os.umask(0o022)
    try:
        target = write_file(tmp_path / "secret.txt", "x", mode=0o600)
        assert target.stat().st_mode & 0o777 == 0o600
        assert os.umask(0o022) == 0o022
    finally:
        os.umask(before)


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_file_modes_restores_umask_on_error() -> None:
    before = os.umask(0o022)
    try:
        with pytest.raises(RuntimeError):
            with file_modes(0o700):
                raise RuntimeError("boom")
        assert os.umask(0o022) == 0o022
    finally:
        os.umask(before)
