from __future__ import annotations

from pathlib import Path

import pytest

from core.files import AllOf, AnyOf, directory_size, expand_glob, file_exists, file_size, path
from core.interfaces.process import ProcessResult
from tests._fixtures.fakes import FakeRunner


def test_path_expands_home_and_normalizes(fake_home: Path) -> None:
    assert path("~", "a", "..", "b") == fake_home / "b"


def test_path_expands_environment_variables(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOTKIT_TEST_ROOT", str(tmp_path))
    assert path("$DOTKIT_TEST_ROOT", "x") == tmp_path / "x"


def test_path_without_segments_is_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert path() == Path.cwd()


def test_expand_glob(tmp_path: Path) -> None:
    for name in ("b.el", "a.el", "c.txt"):
        (tmp_path / name).write_text("", encoding="utf-8")

    assert expand_glob(tmp_path, "*.el") == [tmp_path / "a.el", tmp_path / "b.el"]
    assert expand_glob(tmp_path, "c.txt") == [tmp_path / "c.txt"]
    assert expand_glob(tmp_path, "missing.txt") == []


def test_file_size(tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    target.write_bytes(b"12345")

    assert file_size(target) == 5
    assert file_size(tmp_path / "nope") is None


def test_directory_size_sums_du_output(tmp_path: Path) -> None:
    runner = FakeRunner({"du": ProcessResult(0, f"12\t{tmp_path}/a\n30\t{tmp_path}/b")})

    assert directory_size(tmp_path / "a", tmp_path / "b", runner=runner) == 42
    assert runner.calls == [("du", "-sk", str(tmp_path / "a"), str(tmp_path / "b"))]


def test_directory_size_is_none_when_du_fails(tmp_path: Path) -> None:
    runner = FakeRunner({"du": ProcessResult(127, "", "du: not found")})

    assert directory_size(tmp_path, runner=runner) is None


def test_file_exists_forms(tmp_path: Path) -> None:
    (tmp_path / "init.json").write_text("{}", encoding="utf-8")
    (tmp_path / "config.py").write_text("", encoding="utf-8")

    assert file_exists("init.json", tmp_path) == tmp_path / "init.json"
    assert file_exists("packages.json", tmp_path) is None
    assert file_exists(AllOf("init.json", "config.py"), tmp_path) == tmp_path / "config.py"
    assert file_exists(AllOf("init.json", "packages.json"), tmp_path) is None
    assert file_exists(AnyOf("packages.json", "config.py", "init.json"), tmp_path) == tmp_path / "config.py"
    assert file_exists(AnyOf("x", AllOf("init.json")), tmp_path) == tmp_path / "init.json"


def test_file_exists_rejects_unknown_forms() -> None:
    with pytest.raises(TypeError):
        file_exists(42)  # type: ignore[arg-type]
