"""Secuenciador del doctor.

Este módulo ejecuta una lista ordenada de checks de entorno. Cada check recibe
un `CheckContext` con su propio acumulador de hallazgos; el llamador hace el
merge. Los efectos de salida (imprimir, colores) quedan fuera del Core: se
delegan en `DoctorHooks`, igual que la CLI hace con las barras de progreso.

Garantías:
- Un fallo dentro de un check se convierte en un único error; la ejecución
  siempre llega al final.
- Un `FrameworkInitError` marca el framework como no cargado y se saltan los
  checks que dependen de él.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

from adapters.modules.registry import FilesystemModuleRegistry
from adapters.packages import LocalPackageRegistry
from adapters.projects import MarkerProjectResolver
from core.config import AppSettings
from core.domain.findings import Findings
from core.domain.models import Finding, ModuleInfo, Severity
from core.errors import FrameworkInitError
from core.interfaces.process import ProcessRunner
from core.interfaces.registry import ModuleRegistry, PackageRegistry, ProjectResolver
from core.process import call_process, which

logger = logging.getLogger(__name__)


def _has_module(name: str) -> bool:
    return importlib.util.find_spec(name) is not None


def _describe(exc: BaseException) -> str:
    detail = str(exc)
    return f"{type(exc).__name__}: {detail}" if detail else type(exc).__name__


@dataclass
class DoctorHooks:
    """Optional callbacks for UI layers."""

    message: Callable[[Finding, int], None] | None = None
    explanation: Callable[[str, int], None] | None = None


@dataclass
class DoctorEnvironment:
    """Colaboradores inyectados en los checks."""

    settings: AppSettings
    modules: ModuleRegistry
    packages: PackageRegistry
    projects: ProjectResolver
    run_process: ProcessRunner = call_process
    which: Callable[[str], str | None] = which
    has_module: Callable[[str], bool] = _has_module
    python_version: tuple[int, ...] = field(default_factory=lambda: tuple(sys.version_info[:3]))
    python_release: str = sys.version_info.releaselevel


@dataclass
class DoctorState:
    """Mutable state shared by the checks of one run."""

    env: DoctorEnvironment
    modules: list[ModuleInfo] | None = None
    framework_failed: bool = False

    @property
    def framework_loaded(self) -> bool:
        return self.modules is not None and not self.framework_failed


class CheckContext:
    """Salida y acumulador de un check (o de un scope anidado).

    `start`, `info` y `success` solo se imprimen; `warn` y `error` además se
    acumulan. Con `echo=False` (scopes de módulo) la salida se guarda en orden
    y el scope padre la reproduce al terminar.
    """

    def __init__(
        self,
        findings: Findings | None = None,
        *,
        hooks: DoctorHooks | None = None,
        indent: int = 0,
        echo: bool = True,
    ) -> None:
        self.findings = findings if findings is not None else Findings()
        self._hooks = hooks or DoctorHooks()
        self._indent = indent
        self._echo = echo
        self._last: Finding | None = None
        self._pending: list[tuple[Finding | str, int]] = []

    def _emit(self, finding: Finding, indent: int) -> None:
        if not self._echo:
            self._pending.append((finding, indent))
        elif self._hooks.message:
            self._hooks.message(finding, indent)

    def _emit_explanation(self, text: str, indent: int) -> None:
        if not self._echo:
            self._pending.append((text, indent))
        elif self._hooks.explanation:
            self._hooks.explanation(text, indent)

    def _say(self, severity: Severity, message: str) -> None:
        self._last = None
        self._emit(Finding(severity=severity, message=message), self._indent)

    def start(self, message: str) -> None:
        self._say(Severity.START, message)

    def info(self, message: str) -> None:
        self._say(Severity.INFO, message)

    def success(self, message: str) -> None:
        self._say(Severity.SUCCESS, message)

    def _record(self, severity: Severity, message: str, explanation: str | None) -> Finding:
        finding = self.findings.add(Finding(severity=severity, message=message))
        self._last = finding
        self._emit(finding, self._indent)
        if explanation:
            self.explain(explanation)
        return self._last

    def warn(self, message: str, *, explanation: str | None = None) -> Finding:
        return self._record(Severity.WARNING, message, explanation)

    def error(self, message: str, *, explanation: str | None = None) -> Finding:
        return self._record(Severity.ERROR, message, explanation)

    def explain(self, text: str) -> None:
        """Attach `text` to the previous warning/error and print it indented."""

        text = text.strip()
        if not text:
            return
        if self._last is not None:
            joined = f"{self._last.explanation}\n{text}" if self._last.explanation else text
            updated = self._last.model_copy(update={"explanation": joined})
            self.findings.replace_last(self._last, updated)
            self._last = updated
        self._emit_explanation(text, self._indent + 1)

    @contextmanager
    def group(self) -> Iterator[CheckContext]:
        self._indent += 1
        try:
            yield self
        finally:
            self._indent -= 1

    @contextmanager
    def scope(self, name: str) -> Iterator[CheckContext]:
        """Run a nested diagnostic with its own accumulator.

        An exception (or `SystemExit`) escaping the body becomes one error of
        the scope. Everything the scope printed is replayed in order under a
        `name` header (only if it printed anything) and its findings are
        merged into this context tagged with `name`.
        """

        child = CheckContext(hooks=self._hooks, indent=self._indent + 1, echo=False)
        try:
            yield child
        except (Exception, SystemExit) as exc:
            logger.debug("scope %s failed", name, exc_info=True)
            child.error(_describe(exc))

        if child._pending:
            self._emit(Finding(severity=Severity.START, message=name), self._indent)
            for item, indent in child._pending:
                if isinstance(item, Finding):
                    self._emit(item, indent)
                else:
                    self._emit_explanation(item, indent)
        self.findings.merge(child.findings, scope=name)
        self._last = None


CheckFn = Callable[[CheckContext, DoctorState], None]


@dataclass(frozen=True)
class Check:
    title: str
    run: CheckFn
    requires_framework: bool = False


@dataclass
class DoctorReport:
    findings: Findings = field(default_factory=Findings)
    framework_loaded: bool = False

    @property
    def warnings(self) -> list[Finding]:
        return self.findings.warnings

    @property
    def errors(self) -> list[Finding]:
        return self.findings.errors

    def summary(self) -> list[tuple[Severity, str]]:
        lines: list[tuple[Severity, str]] = []
        for items, label, severity in (
            (self.warnings, "warning", Severity.WARNING),
            (self.errors, "error", Severity.ERROR),
        ):
            if len(items) == 1:
                lines.append((severity, f"There is 1 {label}!"))
            elif items:
                lines.append((severity, f"There are {len(items)} {label}s!"))
        if not lines:
            lines.append((Severity.SUCCESS, "Everything seems fine, happy hacking!"))
        return lines


class Doctor:
    """Ejecuta los checks en orden y devuelve el `DoctorReport`."""

    def __init__(
        self,
        env: DoctorEnvironment,
        checks: Sequence[Check] | None = None,
        *,
        hooks: DoctorHooks | None = None,
    ) -> None:
        if checks is None:
            from core.services.checks import DEFAULT_CHECKS

            checks = DEFAULT_CHECKS
        self._env = env
        self._checks = tuple(checks)
        self._hooks = hooks or DoctorHooks()

    def run(self) -> DoctorReport:
        findings = Findings()
        state = DoctorState(env=self._env)
        for check in self._checks:
            if check.requires_framework and not state.framework_loaded:
                logger.debug("skipping %r: framework not loaded", check.title)
                continue
            findings.merge(self.run_check(check, state))
        return DoctorReport(findings=findings, framework_loaded=state.framework_loaded)

    def run_check(self, check: Check, state: DoctorState) -> Findings:
        ctx = CheckContext(hooks=self._hooks)
        ctx.start(check.title)
        with ctx.group():
            try:
                check.run(ctx, state)
            except FrameworkInitError as exc:
                state.framework_failed = True
                ctx.error(f"Attempt to load dotkit failed: {exc}")
            except (Exception, SystemExit) as exc:
                logger.debug("check %r failed", check.title, exc_info=True)
                ctx.error(f"Check failed unexpectedly: {_describe(exc)}")
        return ctx.findings


def build_environment(settings: AppSettings) -> DoctorEnvironment:
    """Conecta los adaptadores de disco a partir de la configuración."""

    private_dir = settings.resolved_private_dir()
    return DoctorEnvironment(
        settings=settings,
        modules=FilesystemModuleRegistry(
            private_dir,
            module_dirs=(private_dir / "modules", settings.framework_dir / "modules"),
        ),
        packages=LocalPackageRegistry(settings.packages_dir, builtin=settings.builtin_packages),
        projects=MarkerProjectResolver(settings.project_markers),
    )
