"""`dotkit files`: acceso desde la terminal a la librería de ficheros.

La salida es texto plano (una ruta por línea) para poder encadenarla con otras
herramientas.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from core.files import EntryType, directory_size, files_in
from core.files.walker import DEFAULT_DEPTH, DEFAULT_MATCH

app = typer.Typer(no_args_is_help=True, help="Framework file helpers.")

_err_console = Console(stderr=True)


@app.command()
def find(
    paths: list[Path] = typer.Argument(..., help="Directories to walk."),
    match: str = typer.Option(DEFAULT_MATCH, "--match", "-m", help="Regex searched against '/NAME'."),
    glob: str = typer.Option("*", "--glob", "-g", help="Glob applied to names at every level."),
    entry_type: EntryType = typer.Option(EntryType.FILES, "--type", "-t", help="Entries to list."),
    depth: int = typer.Option(DEFAULT_DEPTH, "--depth", "-d", min=0, help="Levels to descend."),
    mindepth: int = typer.Option(0, "--mindepth", min=0, help="Levels to skip."),
    full: bool = typer.Option(False, "--full", help="Print absolute paths."),
    follow: bool = typer.Option(True, "--follow/--no-follow", help="Descend into symlinked dirs."),
    relative_to: Optional[Path] = typer.Option(None, "--relative-to", help="Base for relative paths."),
) -> None:
    """List matching files and directories, shallowest first."""

    try:
        pattern = re.compile(match)
    except re.error as exc:
        raise typer.BadParameter(f"invalid --match regex: {exc}") from exc

    results = files_in(
        paths,
        match=pattern,
        glob=glob,
        depth=depth,
        mindepth=mindepth,
        type=entry_type,
        follow_symlinks=follow,
        full=full,
        relative_to=relative_to,
    )
    for result in results:
        typer.echo(str(result))


@app.command()
def size(
    dirs: list[Path] = typer.Argument(..., help="Directories to measure."),
) -> None:
    """Total disk usage of DIRS in KiB (needs `du`)."""

    missing = [d for d in dirs if not d.exists()]
    if missing:
        raise typer.BadParameter(f"no such directory: {missing[0]}")

    total = directory_size(*dirs)
    if total is None:
        _err_console.print("[red]Could not measure size: is `du` installed?[/red]")
        raise typer.Exit(code=1)
    typer.echo(f"{total} KiB")
