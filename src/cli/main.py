"""Aplicación Typer raíz.

Por qué un único `app`:
- Un solo entry point (`dotkit`) que agrupa `doctor` y `files` como subcomandos.
"""

from __future__ import annotations

import typer

from cli import doctor, files
from cli.log import configure_logging

app = typer.Typer(
    no_args_is_help=True,
    help="dotkit: tooling for a modular configuration framework.",
)
app.add_typer(doctor.app, name="doctor")
app.add_typer(files.app, name="files")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging on stderr."),
) -> None:
    configure_logging(debug=debug)


def run() -> None:
    app()
