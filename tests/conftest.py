from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from core.interfaces.process import ProcessResult
from core.services.doctor import DoctorEnvironment, build_environment
from tests._fixtures.fakes import FakeRunner, fake_which
from tests._fixtures.framework_builder import FrameworkBuilder

ALL_TOOLS = ("git", "rg", "fd", "fc-list", "du")


@pytest.fixture(autouse=True)
def fake_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point $HOME at a throwaway directory and clear dotkit's env vars.

    The home lives outside `tmp_path` so walks over `tmp_path` never see it.
    """
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for name in ("XDG_CONFIG_HOME", "DOTKIT_DIR", "DOTKIT_FRAMEWORK_DIR"):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def framework(fake_home: Path) -> FrameworkBuilder:
    return FrameworkBuilder(fake_home)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner({("git", "version"): ProcessResult(0, "git version 2.43.0")})


@pytest.fixture
def make_env(framework: FrameworkBuilder, runner: FakeRunner):
    """Build a `DoctorEnvironment` over `framework` with faked tools."""

    def _make(*, tools=ALL_TOOLS, settings=None, **overrides) -> DoctorEnvironment:
        env = build_environment(settings or framework.settings())
        values = {
            "run_process": runner,
            "which": fake_which(tools),
            "has_module": lambda name: True,
            "python_version": (3, 12, 1),
            "python_release": "final",
        }
        values.update(overrides)
        return dataclasses.replace(env, **values)

    return _make
