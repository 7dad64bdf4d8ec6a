from __future__ import annotations

import pytest

from adapters.modules import FilesystemModuleRegistry, load_module_check, run_module_doctor
from core.errors import FrameworkInitError
from core.interfaces.registry import ModuleRegistry


def _registry(framework) -> FilesystemModuleRegistry:
    return FilesystemModuleRegistry(
        framework.private_dir,
        module_dirs=(framework.private_dir / "modules", framework.framework_dir / "modules"),
    )


def test_satisfies_the_registry_protocol(framework) -> None:
    assert isinstance(_registry(framework), ModuleRegistry)


def test_lists_modules_in_init_order(framework) -> None:
    framework.init(
        {
            "lang": ["python", {"name": "rust", "flags": ["+lsp", "-cargo"]}],
            "tools": ["magit", "magit"],
        }
    )
    framework.module("lang", "python")
    private_rust = framework.module("lang", "rust", private=True)

    modules = _registry(framework).list()

    assert [m.key for m in modules] == ["lang python", "lang rust", "tools magit"]
    assert modules[1].flags == ("+lsp", "-cargo")
    assert modules[1].path == private_rust
    assert modules[2].path is None


def test_enabled(framework) -> None:
    framework.init({"lang": ["python"]})
    registry = _registry(framework)

    assert registry.enabled("lang", "python")
    assert not registry.enabled("lang", "rust")


def test_missing_init_file_means_no_modules(framework) -> None:
    assert _registry(framework).list() == []


@pytest.mark.parametrize(
    "content",
    [
        "{oops",
        '{"modules": {"lang": [{"name": "python", "flags": ["lsp"]}]}}',
        '{"modules": {"lang": [{"name": "python", "extra": 1}]}}',
        '{"modules": ["python"]}',
    ],
)
def test_invalid_init_file_is_a_framework_error(framework, content: str) -> None:
    (framework.private_dir / "init.json").write_text(content, encoding="utf-8")

    with pytest.raises(FrameworkInitError):
        _registry(framework).list()


def test_load_module_check(framework) -> None:
    module_dir = framework.module(
        "lang",
        "python",
        doctor="""
        def check(doctor):
            doctor.append("checked")
        """,
    )
    calls: list[str] = []

    assert callable(load_module_check(module_dir / "doctor.py"))
    assert run_module_doctor(module_dir / "doctor.py", calls) is True
    assert calls == ["checked"]


def test_script_without_check_is_skipped(framework) -> None:
    module_dir = framework.module("lang", "python", doctor="VALUE = 1\n")

    assert load_module_check(module_dir / "doctor.py") is None
    assert run_module_doctor(module_dir / "doctor.py", object()) is False


def test_missing_script(framework) -> None:
    with pytest.raises(FileNotFoundError, match="Cannot open doctor script"):
        load_module_check(framework.framework_dir / "doctor.py")
