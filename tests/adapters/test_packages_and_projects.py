from __future__ import annotations

from pathlib import Path

import pytest

from adapters.packages import LocalPackageRegistry
from adapters.projects import MarkerProjectResolver
from core.domain.models import ModuleInfo, PackageDeclaration, PackageStatus
from core.interfaces.registry import PackageRegistry, ProjectResolver


@pytest.fixture
def registry(framework) -> LocalPackageRegistry:
    framework.install("magit", "vertico")
    return LocalPackageRegistry(framework.settings().packages_dir, builtin=["org"])


@pytest.mark.parametrize(
    ("declaration", "expected"),
    [
        (PackageDeclaration(name="magit"), PackageStatus.INSTALLED),
        (PackageDeclaration(name="org"), PackageStatus.BUILTIN),
        (PackageDeclaration(name="helm", disable=True), PackageStatus.DISABLED),
        (PackageDeclaration(name="pdf-tools", ignore=True), PackageStatus.IGNORED),
        (PackageDeclaration(name="evil"), PackageStatus.MISSING),
    ],
)
def test_package_status(registry, declaration: PackageDeclaration, expected: PackageStatus) -> None:
    assert registry.status(declaration) is expected
    assert expected.satisfied is (expected is not PackageStatus.MISSING)


def test_declared_packages(framework, registry) -> None:
    module_dir = framework.module(
        "tools",
        "magit",
        packages=[{"name": "magit", "recipe": {"repo": "magit/magit"}}, {"name": "forge"}],
    )
    module = ModuleInfo(category="tools", name="magit", path=module_dir)

    declared = registry.declared(module)

    assert isinstance(registry, PackageRegistry)
    assert [p.name for p in declared] == ["magit", "forge"]
    assert declared[0].recipe == {"repo": "magit/magit"}
    assert registry.declared(ModuleInfo(category="tools", name="none")) == []


def test_project_root_is_nearest_marked_ancestor(tmp_path: Path) -> None:
    (tmp_path / "repo" / ".git").mkdir(parents=True)
    nested = tmp_path / "repo" / "src" / "pkg"
    nested.mkdir(parents=True)
    resolver = MarkerProjectResolver([".git", ".projectile"])

    assert isinstance(resolver, ProjectResolver)
    assert resolver.root_for(nested) == tmp_path / "repo"
    assert resolver.root_for(tmp_path / "repo") == tmp_path / "repo"
