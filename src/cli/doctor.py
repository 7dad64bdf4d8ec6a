"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from cli.ui_components import build_console_hooks, build_paths_table, print_banner, print_summary
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.services.doctor import Doctor, build_environment

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.command()
def run(
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    """Run every diagnostic and print a summary.

    The exit status is always 0; problems are reported in the summary.
    """

    settings = AppSettings()
    if banner:
        print_banner(_console)

    doctor = Doctor(build_environment(settings), hooks=build_console_hooks(_console))
    report = doctor.run()
    print_summary(_console, report)


@app.command()
def paths() -> None:
    """Show the directories dotkit resolved from the environment."""

    settings = AppSettings()
    private_dir = settings.resolved_private_dir()
    rows: list[tuple[str, Path, bool]] = [
        ("framework", settings.framework_dir, settings.framework_dir.is_dir()),
        ("private", private_dir, private_dir.is_dir()),
        ("init.json", private_dir / "init.json", (private_dir / "init.json").is_file()),
        ("cache", settings.cache_dir, settings.cache_dir.is_dir()),
        ("packages", settings.packages_dir, settings.packages_dir.is_dir()),
        ("user .env", get_user_env_file(), get_user_env_file().is_file()),
    ]
    _console.print(build_paths_table(rows))


@app.command()
def configure() -> None:
    """Interactive setup (stores the directories in the user config .env)."""

    settings = AppSettings()
    framework_dir = typer.prompt(
        "Framework directory",
        default=str(settings.framework_dir),
        show_default=True,
    ).strip()
    private_dir = typer.prompt(
        "Private config directory",
        default=str(settings.resolved_private_dir()),
        show_default=True,
    ).strip()

    if not framework_dir:
        raise typer.BadParameter("framework directory is required")

    env_path = write_user_env_vars(
        {
            "DOTKIT_FRAMEWORK_DIR": framework_dir,
            "DOTKIT_DIR": private_dir,
        }
    )

    _console.print(f"[green]Saved dotkit config to:[/green] {env_path}")
