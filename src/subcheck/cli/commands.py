"""CLI commands for subcheck configuration.

Commands:
- init: Seed a config file from the default template
- show: Print the effective configuration
- remove-sub: Remove an entry from a list section (sub-urls by default)
"""

from __future__ import annotations

import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from subcheck.config.editor import SUB_URLS_KEY, remove_list_entry
from subcheck.config.errors import ConfigError
from subcheck.config.handle import CONFIG_ENV_VAR
from subcheck.config.settings import DEFAULT_CONFIG_PATH, load_config
from subcheck.config.template import write_default_config

app = typer.Typer(
    name="subcheck",
    help="Manage the subcheck configuration file.",
    no_args_is_help=True,
)

console = Console()


def _resolve_config_path(config: str | None) -> Path:
    """--config, then SUBCHECK_CONFIG, then config/config.yaml."""
    if config:
        return Path(config).expanduser()
    env_value = os.environ.get(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_CONFIG_PATH


@app.command()
def init(
    config: str | None = typer.Option(None, "--config", "-c", help="Config file path"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing file"),
) -> None:
    """Create a config file from the default template."""
    path = _resolve_config_path(config)
    try:
        written = write_default_config(path, overwrite=force)
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if written:
        console.print(f"[green]✓ Config written:[/green] {path}")
    else:
        console.print(f"[yellow]⚠ Config already exists:[/yellow] {path}")
        console.print("  [dim]use --force to overwrite[/dim]")


@app.command()
def show(
    config: str | None = typer.Option(None, "--config", "-c", help="Config file path"),
) -> None:
    """Show the effective configuration."""
    path = _resolve_config_path(config)
    try:
        settings = load_config(path)
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=str(path))
    table.add_column("key", style="cyan", no_wrap=True)
    table.add_column("value")
    for key, value in settings.to_dict().items():
        if isinstance(value, list):
            value = "\n".join(str(v) for v in value) if value else "[]"
        table.add_row(key, str(value))
    console.print(table)


@app.command(name="remove-sub")
def remove_sub(
    url: str = typer.Argument(..., help="Entry value to remove"),
    config: str | None = typer.Option(None, "--config", "-c", help="Config file path"),
    section: str = typer.Option(SUB_URLS_KEY, "--section", "-s", help="List key to edit"),
    no_atomic: bool = typer.Option(
        False, "--no-atomic", help="Overwrite the file in place instead of replacing it"
    ),
) -> None:
    """Remove an entry from a list section, keeping comments and formatting."""
    path = _resolve_config_path(config)
    try:
        removed = remove_list_entry(path, section, url, atomic=not no_atomic)
    except ConfigError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if removed:
        console.print(f"[green]✓ Removed {removed} line(s) from {section}[/green]")
    else:
        console.print(f"[dim]No entry in {section} matched:[/dim] {escape(url)}")


if __name__ == "__main__":
    app()
