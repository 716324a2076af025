"""Core CLI app definition and global state."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="nomina",
    help="Generate names and titles from recipe packages.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

# Global state for JSON mode (set by callback)
_json_mode = False


def get_json_mode() -> bool:
    """Get current JSON mode state."""
    return _json_mode


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging for CLI runs."""
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        print(f"nomina {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output machine-readable JSON instead of human-friendly text",
            is_eager=True,
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show info-level log messages"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Show debug-level log messages"),
    ] = False,
):
    """Nomina: recipe-driven name generator.

    Use --json for machine-readable output suitable for scripting.
    Use --verbose or --debug to see selection and generation logs.
    """
    global _json_mode
    _json_mode = json_output
    setup_logging(verbose=verbose, debug=debug)


# Import commands to register them with the app
from .commands import (  # noqa: E402, F401
    generate,
    inspect,
    transform,
    config_cmd,
)
