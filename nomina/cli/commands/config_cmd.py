"""Config command for viewing and managing nomina configuration."""

import typer

from ... import config as config_module
from ...config import get_config, reset_config
from ..app import app, console


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. selection.max_retries, defaults.locale)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set",
    ),
):
    """View or modify nomina configuration.

    Examples:
        nomina config show
        nomina config set defaults.locale de
        nomina config set generation.max_recursion_depth 8
        nomina config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] nomina config set <key> <value>")
            console.print()
            _print_valid_keys()
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _valid_keys() -> list[str]:
    return sorted(
        f"{section}.{name}"
        for section, values in get_config().to_dict().items()
        for name in values
    )


def _print_valid_keys():
    console.print("Available keys:")
    for k in _valid_keys():
        console.print(f"  {k}")


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    console.print()
    console.print("[bold]Nomina Configuration[/bold]")
    console.print("─" * 40)

    console.print()
    console.print("[bold cyan]Selection[/bold cyan]")
    console.print(f"  max_retries             = {config.selection.max_retries}")

    console.print()
    console.print("[bold cyan]Generation[/bold cyan]")
    gen = config.generation
    depth = gen.max_recursion_depth
    depth_val = depth if depth is not None else "[dim](unlimited)[/dim]"
    console.print(f"  max_suggestions         = {gen.max_suggestions}")
    console.print(f"  attempts_per_suggestion = {gen.attempts_per_suggestion}")
    console.print(f"  max_recursion_depth     = {depth_val}")

    console.print()
    console.print("[bold cyan]Defaults[/bold cyan]")
    console.print(f"  locale                  = {config.defaults.locale}")
    console.print(f"  count                   = {config.defaults.count}")

    console.print()
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        console.print(f"Config file: {config_file}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({config_file})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    config = get_config()

    try:
        config.set_value(key, value)
    except KeyError:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        _print_valid_keys()
        raise typer.Exit(1)
    except ValueError:
        console.print(f"[red]Invalid integer value:[/red] {value}")
        raise typer.Exit(1)

    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {value}")
    console.print(f"  Saved to {config_module.CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    config_file = config_module.CONFIG_FILE
    if config_file.exists():
        config_file.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {config_file}")
    else:
        console.print("Config already at defaults (no config file exists)")
