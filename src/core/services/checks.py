"""Checks del doctor, en el orden en que se ejecutan.

Cada check es una función `(ctx, state) -> None` que emite mensajes a través de
`ctx`. Ninguno lanza a propósito salvo la inicialización del framework, que
propaga `FrameworkInitError` para que el secuenciador desactive los checks que
dependen de los módulos.
"""

from __future__ import annotations

import re
from pathlib import Path

from adapters.modules.doctor_script import run_module_doctor
from core import __version__
from core.config import get_legacy_private_dir, get_legacy_rc_file, get_xdg_private_dir
from core.domain.models import ModuleInfo
from core.files import directory_size, file_size, files_in
from core.services.doctor import Check, CheckContext, DoctorState
from core.services.module_doctor import ModuleDoctor

_GIT_VERSION_RE = re.compile(r"git version (\d+(?:\.\d+){1,2})")
_GIT_REWRITE_KEY_RE = r"^url\.git://github\.com"
_OPTIONAL_FEATURES: tuple[tuple[str, str], ...] = (
    ("sqlite3", "Package metadata caches fall back to plain JSON files, which is slower."),
    ("zlib", "Compressed package archives cannot be unpacked."),
    ("ssl", "Packages cannot be fetched over HTTPS."),
)


def parse_version(value: str) -> tuple[int, ...]:
    parts = [int(p) for p in re.findall(r"\d+", value)]
    while len(parts) > 1 and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def version_lt(found: str | tuple[int, ...], minimum: str) -> bool:
    if not isinstance(found, str):
        found = ".".join(str(p) for p in found)
    return parse_version(found) < parse_version(minimum)


def check_python_runtime(ctx: CheckContext, state: DoctorState) -> None:
    env = state.env
    version = ".".join(str(p) for p in env.python_version)
    minimum = env.settings.min_python_version
    if version_lt(env.python_version, minimum):
        ctx.error(
            f"Python {version} detected! dotkit requires Python {minimum} or newer.",
        )
    elif env.python_release != "final":
        ctx.warn(
            f"Python {version} ({env.python_release}) detected",
            explanation=(
                "A pre-release interpreter is in use. dotkit is only tested against stable "
                "releases, so expect some breakage."
            ),
        )
    else:
        ctx.success(f"Python {version}")


def check_runtime_features(ctx: CheckContext, state: DoctorState) -> None:
    for name, consequence in _OPTIONAL_FEATURES:
        if state.env.has_module(name):
            continue
        ctx.warn(
            f"Python was built without the `{name}` extension",
            explanation=f"{consequence} Rebuild or reinstall Python with {name} support.",
        )


def check_config_conflicts(ctx: CheckContext, state: DoctorState) -> None:
    rc_file = get_legacy_rc_file()
    if rc_file.exists():
        ctx.warn(
            f"Detected a {rc_file} file, which may prevent dotkit from loading",
            explanation=(
                "Settings in this file are read before the framework starts and can "
                "shadow your private config. Move its contents into init.json and delete it."
            ),
        )

    xdg_dir = get_xdg_private_dir()
    legacy_dir = get_legacy_private_dir()
    if xdg_dir.is_dir() and legacy_dir.is_dir() and not xdg_dir.samefile(legacy_dir):
        ctx.warn(
            f"Detected two private configs, in {xdg_dir} and {legacy_dir}",
            explanation=(
                f"The second one is ignored. Merge them into {xdg_dir} or delete one of them."
            ),
        )


def check_prerequisites(ctx: CheckContext, state: DoctorState) -> None:
    env = state.env
    minimum = env.settings.min_git_version

    if not env.which("git"):
        ctx.error("Couldn't find git on your machine! dotkit's package manager won't work.")
    else:
        result = env.run_process("git", "version")
        match = _GIT_VERSION_RE.search(result.stdout) if result.ok else None
        if match is None:
            ctx.warn(f"Cannot determine Git version. dotkit requires git {minimum} or newer!")
        elif version_lt(match.group(1), minimum):
            ctx.error(f"Git {match.group(1)} detected! dotkit requires git {minimum} or newer!")

        rules = env.run_process("git", "config", "--global", "--get-regexp", _GIT_REWRITE_KEY_RE)
        if rules.ok and rules.stdout.strip():
            ctx.warn(
                "Detected insteadOf rules in your global gitconfig.",
                explanation=(
                    "dotkit's package manager relies on git, and many packages are hosted "
                    "on GitHub. Rewrite rules like these will break it:\n\n"
                    '  [url "git://github.com"]\n'
                    "  insteadOf = https://github.com\n\n"
                    "Remove them from your gitconfig or scope them with an includeIf rule."
                ),
            )

    if not env.which("rg"):
        ctx.error(
            "Couldn't find the `rg' binary; this is a hard dependency, "
            "file searches may not work at all"
        )
    if not (env.which("fd") or env.which("fdfind")):
        ctx.warn("Couldn't find the `fd' binary; project file searches will be slightly slower")


def stale_compiled_files(root: Path) -> list[Path]:
    """`*.pyc` files outside `__pycache__` whose source is gone, relative to `root`."""

    def _not_stale(candidate: Path) -> bool:
        return candidate.parent.name == "__pycache__" or candidate.with_suffix(".py").exists()

    return files_in(root, match=r"\.pyc$", exclude=_not_stale, relative_to=root)


def _report_stale(ctx: CheckContext, root: Path) -> None:
    if not root.is_dir():
        ctx.info(f"{root} does not exist, skipping")
        return
    for stale in stale_compiled_files(root):
        ctx.warn(f"{stale} is stale: its source file is gone")


def check_framework_stale_files(ctx: CheckContext, state: DoctorState) -> None:
    _report_stale(ctx, state.env.settings.framework_dir)


def check_private_stale_files(ctx: CheckContext, state: DoctorState) -> None:
    _report_stale(ctx, state.env.settings.resolved_private_dir())


def check_framework_init(ctx: CheckContext, state: DoctorState) -> None:
    env = state.env
    modules = env.modules.list()
    state.modules = modules
    ctx.success(f"Initialized dotkit {__version__}")

    if modules:
        ctx.success(f"Detected {len(modules)} modules")
    else:
        ctx.warn("Failed to load any modules. Do you have a private init.json?")

    packages = 0
    for module in modules:
        try:
            packages += len(env.packages.declared(module))
        except (OSError, ValueError):
            # Reported by the module's own scope.
            continue
    ctx.success(f"Detected {packages} packages")


def check_framework_irregularities(ctx: CheckContext, state: DoctorState) -> None:
    env = state.env
    settings = env.settings

    for name in settings.cache_files:
        size = file_size(settings.cache_dir / name)
        if size is None:
            continue
        size_mb = size / 1024 / 1024
        if size_mb > settings.cache_warning_mb:
            ctx.warn(
                f"{name} is too large ({size_mb:.02f}mb). This may cause freezes or odd startup delays",
                explanation="Consider deleting it from your system (manually)",
            )

    home = Path.home()
    root = env.projects.root_for(home)
    if root is not None and root == home:
        ctx.warn(
            "Your $HOME is recognized as a project root",
            explanation=(
                "dotkit will disable bottom-up root search, which may reduce the accuracy "
                "of project detection."
            ),
        )

    _check_fonts(ctx, state)

    if settings.packages_dir.is_dir():
        size_kib = directory_size(settings.packages_dir, runner=env.run_process)
        if size_kib is not None:
            ctx.info(f"Package store uses {size_kib / 1024:.1f} MB")


def _check_fonts(ctx: CheckContext, state: DoctorState) -> None:
    env = state.env
    fonts = env.settings.required_fonts
    if not fonts:
        return
    if not env.which("fc-list"):
        ctx.warn("Unable to detect fonts because fontconfig isn't installed")
        return

    result = env.run_process("fc-list", ":", "family", "file")
    if not result.ok:
        ctx.error("There was an error running `fc-list'. Is fontconfig installed correctly?")
        return

    for font in fonts:
        if re.search(re.escape(font), result.stdout, re.IGNORECASE):
            ctx.success(f"Found font {font}")
        else:
            ctx.warn(
                f"Couldn't find font {font}",
                explanation="Install it system-wide and run `fc-cache -f` so fontconfig sees it.",
            )


def _check_module(scope: CheckContext, state: DoctorState, module: ModuleInfo) -> None:
    env = state.env
    if module.path is None:
        scope.error(f"Couldn't find the {module.key} module in any modules directory")
        return

    for declaration in env.packages.declared(module):
        if not env.packages.status(declaration).satisfied:
            scope.error(f"Missing package: {declaration.name}")

    doctor_file = module.doctor_file
    if doctor_file is None or not doctor_file.is_file():
        return
    try:
        run_module_doctor(doctor_file, ModuleDoctor(scope, module, state))
    except SyntaxError as exc:
        scope.error(f"Syntax error: {exc}")
    except FileNotFoundError as exc:
        scope.error(str(exc))


def check_modules(ctx: CheckContext, state: DoctorState) -> None:
    for module in state.modules or []:
        with ctx.scope(module.key) as scope:
            _check_module(scope, state, module)


DEFAULT_CHECKS: tuple[Check, ...] = (
    Check("Checking Python runtime...", check_python_runtime),
    Check("Checking for optional runtime features...", check_runtime_features),
    Check("Checking for config conflicts...", check_config_conflicts),
    Check("Checking for dotkit's prerequisites...", check_prerequisites),
    Check("Checking for stale compiled files...", check_framework_stale_files),
    Check("Checking dotkit...", check_framework_init),
    Check(
        "Checking dotkit for irregularities...",
        check_framework_irregularities,
        requires_framework=True,
    ),
    Check("Checking for stale compiled files in your private config...", check_private_stale_files),
    Check("Checking your enabled modules...", check_modules, requires_framework=True),
)
