"""Config command for viewing and managing modplan configuration."""

import typer

from ..app import app, console
from ...config import CONFIG_FILE, LOG_LEVELS, get_config, parse_bool, reset_config


VALID_KEYS = {
    "blocks_dir",
    "directory",
    "log_level",
    "show_infos",
}


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. blocks_dir, directory)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify modplan configuration.

    Examples:
        modplan config show
        modplan config set blocks_dir ./requirements
        modplan config set directory minor
        modplan config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] modplan config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]modplan Configuration[/bold]")
    console.print("─" * 40)
    console.print()
    console.print("[bold cyan]Blocks[/bold cyan]")
    console.print(f"  blocks_dir = {config.blocks_dir}")
    console.print(f"  directory  = {config.directory}")
    console.print()
    console.print("[bold cyan]Output[/bold cyan]")
    console.print(f"  log_level  = {config.log_level}")
    console.print(f"  show_infos = {config.show_infos}")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    config = get_config()

    if key == "show_infos":
        try:
            config.show_infos = parse_bool(value)
        except ValueError:
            console.print(f"[red]Invalid boolean:[/red] {value}")
            raise typer.Exit(1)
    elif key == "log_level":
        if value.upper() not in LOG_LEVELS:
            console.print(f"[red]Invalid log level:[/red] {value}")
            console.print(f"Valid levels: {', '.join(LOG_LEVELS)}")
            raise typer.Exit(1)
        config.log_level = value.upper()
    else:
        setattr(config, key, value)

    config.save()
    reset_config()
    console.print(f"[green]✓[/green] Set {key} = {getattr(config, key)}")


def _reset_config():
    """Delete the config file, restoring defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        console.print(f"[green]✓[/green] Removed {CONFIG_FILE}")
    else:
        console.print("[dim]No config file to remove[/dim]")
    reset_config()
