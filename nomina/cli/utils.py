"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and tables
- Machine mode (--json): Structured JSON output for scripts

Example:
    from ..cli.utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Loaded package", package="names", recipes=4)
        out.table("Recipes", ["ID", "Name"], [["full", "Full name"]])
        return out.finish()
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, PrivateAttr, ConfigDict
from rich.console import Console
from rich.table import Table

from ..core.errors import NominaError


class ExitCode:
    """Standardized exit codes for CLI commands.

    Scripts can check $? and know exactly what failed:
        0 = Success
        1 = Validation error (fix package/input first)
        3 = File not found
        4 = Generation error
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    FILE_NOT_FOUND = 3
    GENERATION_ERROR = 4


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    In human mode: Uses Rich for pretty terminal output with colors and formatting.
    In JSON mode: Collects structured data and outputs JSON at the end.

    Usage:
        out = Output(console=console, json_mode=False)
        out.success("Generated", count=5)
        out.warning("Some warning")
        out.table("Suggestions", ["#", "Text"], [["1", "Hamburger"]])
        exit_code = out.finish()
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        # Ensure _data is a fresh dict for each instance
        self._data = {
            "status": "success",
            "warnings": [],
            "errors": [],
        }

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str, *, suggestion: str | None = None) -> None:
        """Output a warning message."""
        if self.json_mode:
            warning_obj: dict[str, Any] = {"message": message}
            if suggestion:
                warning_obj["suggestion"] = suggestion
            self._data["warnings"].append(warning_obj)
        else:
            self.console.print(f"[yellow]⚠[/yellow] {message}")
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def error(
        self,
        message: str,
        *,
        kind: str | None = None,
        context: dict[str, Any] | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"

        if self.json_mode:
            error_obj: dict[str, Any] = {"message": message}
            if kind:
                error_obj["kind"] = kind
            if context:
                error_obj["context"] = context
            if suggestion:
                error_obj["suggestion"] = suggestion
            self._data["errors"].append(error_obj)
        else:
            self.console.print(f"[red]✗[/red] {message}", highlight=False)
            if suggestion:
                self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def nomina_error(
        self, exc: NominaError, exit_code: int = ExitCode.GENERATION_ERROR
    ) -> None:
        """Report an engine error with its kind and context."""
        self.error(
            exc.message, kind=exc.kind, context=exc.context, exit_code=exit_code
        )

    def text(self, message: str) -> None:
        """Output plain text (human mode only)."""
        if not self.json_mode:
            self.console.print(message)

    def blank(self) -> None:
        """Output a blank line (human mode only)."""
        if not self.json_mode:
            self.console.print()

    def header(self, title: str) -> None:
        """Output a section header."""
        if not self.json_mode:
            self.console.print()
            self.console.print("┌" + "─" * 58 + "┐")
            self.console.print("│" + f" {title}".ljust(58) + "│")
            self.console.print("└" + "─" * 58 + "┘")
            self.console.print()

    def table(
        self,
        title: str,
        columns: list[str],
        rows: list[list[str]],
        *,
        data_key: str | None = None,
        styles: list[str] | None = None,
    ) -> None:
        """Output a formatted table.

        Args:
            title: Table title
            columns: Column headers
            rows: Table rows (list of lists)
            data_key: Key to use in JSON output (defaults to snake_case of title)
            styles: Optional Rich styles for each column
        """
        key = data_key or title.lower().replace(" ", "_")

        if self.json_mode:
            self._data[key] = [dict(zip(columns, row)) for row in rows]
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for i, col in enumerate(columns):
                style = styles[i] if styles and i < len(styles) else None
                table.add_column(col, style=style)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        """Set arbitrary data in JSON output."""
        self._data[key] = value

    def finish(self) -> int:
        """Finalize output and return exit code.

        In JSON mode, prints the accumulated data as JSON to stdout.
        Returns the exit code that should be passed to sys.exit().
        """
        if self.json_mode:
            # Add exit_code to JSON for programmatic access
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str, ensure_ascii=False))

        return self._exit_code


def missing_files(paths: list[Path]) -> list[Path]:
    """Return the paths that do not exist."""
    return [p for p in paths if not p.exists()]
