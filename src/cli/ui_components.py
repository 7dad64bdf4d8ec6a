"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El Core emite `Finding`s sin saber de colores; aquí se decide cómo se ven.
"""

from __future__ import annotations

from pathlib import Path

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Finding, Severity
from core.services.doctor import DoctorHooks, DoctorReport

_INDENT = "  "

_STYLES: dict[Severity, tuple[str, str]] = {
    Severity.START: ("> ", "bold"),
    Severity.INFO: ("  ", "dim"),
    Severity.SUCCESS: ("✓ ", "green"),
    Severity.WARNING: ("! ", "yellow"),
    Severity.ERROR: ("x ", "red"),
}


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (pipelines).
    """

    title = Text("dotkit doctor", style="bold cyan")
    subtitle = Text("Environment diagnostics • Modules • Packages", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def render_finding(finding: Finding, indent: int) -> Text:
    prefix, style = _STYLES[finding.severity]
    text = Text(_INDENT * indent)
    text.append(prefix, style=style)
    text.append(finding.message, style=style if finding.severity is not Severity.INFO else "")
    return text


def render_explanation(explanation: str, indent: int) -> Text:
    pad = _INDENT * indent
    body = "\n".join(f"{pad}{line}" if line else "" for line in explanation.splitlines())
    return Text(body, style="dim")


def build_console_hooks(console: Console) -> DoctorHooks:
    """Hooks del doctor que imprimen en `console`."""

    def _message(finding: Finding, indent: int) -> None:
        console.print(render_finding(finding, indent), highlight=False)

    def _explanation(text: str, indent: int) -> None:
        console.print(render_explanation(text, indent), highlight=False)

    return DoctorHooks(message=_message, explanation=_explanation)


def print_summary(console: Console, report: DoctorReport) -> None:
    console.print()
    for severity, line in report.summary():
        _, style = _STYLES[severity]
        console.print(Text(line, style=f"bold {style}"))


def build_paths_table(rows: list[tuple[str, Path, bool]]) -> Table:
    """Tabla con las rutas resueltas y si existen."""

    table = Table(title="dotkit paths")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Path", style="white")
    table.add_column("Exists", style="green")
    for name, target, exists in rows:
        table.add_row(name, str(target), "yes" if exists else "[red]no[/red]")
    return table
