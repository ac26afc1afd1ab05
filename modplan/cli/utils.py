"""CLI utilities for dual-mode output (human-friendly + machine-readable).

This module provides utilities for CLI commands to support both:
- Human mode (default): Rich formatting with colors and trees
- Machine mode (--json): Structured JSON output for scripts

Example:
    from ..cli.utils import Output, ExitCode

    @app.command()
    def my_command():
        out = Output(console=console, json_mode=get_json_mode())
        out.success("Loaded blocks", count=12)
        return out.finish()
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, PrivateAttr
from rich.console import Console
from rich.table import Table

from ..core.models import Module, ValidationResult, to_modules


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Validation error (fix block files first)
        3 = File not found
        4 = Requirements not met
        5 = Evaluation error (unknown block, malformed rule, ...)
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    FILE_NOT_FOUND = 3
    NOT_SATISFIED = 4
    EVALUATION_ERROR = 5


class Output(BaseModel):
    """Dual-mode output handler for CLI commands.

    Human mode prints each message through Rich as it arrives. JSON mode
    collects messages and data and prints one document from ``finish``.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    console: Console
    json_mode: bool = False

    _data: dict[str, Any] = PrivateAttr()
    _exit_code: int = PrivateAttr(default=ExitCode.SUCCESS)

    def model_post_init(self, __context: Any) -> None:
        self._data = {"status": "success", "warnings": [], "errors": []}

    def success(self, message: str, **data: Any) -> None:
        """Output a success message with optional data."""
        if self.json_mode:
            self._data.update(data)
        else:
            self.console.print(f"[green]✓[/green] {message}")

    def warning(
        self, message: str, *, location: str | None = None, suggestion: str | None = None
    ) -> None:
        self._issue("warnings", "[yellow]⚠[/yellow]", message, location, suggestion)

    def error(
        self,
        message: str,
        *,
        location: str | None = None,
        suggestion: str | None = None,
        exit_code: int = ExitCode.VALIDATION_ERROR,
    ) -> None:
        """Output an error message and set the exit code."""
        self._exit_code = exit_code
        self._data["status"] = "error"
        self._issue("errors", "[red]✗[/red]", message, location, suggestion)

    def _issue(
        self,
        key: str,
        marker: str,
        message: str,
        location: str | None,
        suggestion: str | None,
    ) -> None:
        if self.json_mode:
            entry: dict[str, Any] = {"message": message}
            if location:
                entry["location"] = location
            if suggestion:
                entry["suggestion"] = suggestion
            self._data[key].append(entry)
            return
        prefix = f"{location}: " if location else ""
        self.console.print(f"{marker} {prefix}{message}")
        if suggestion:
            self.console.print(f"  [dim]→ {suggestion}[/dim]")

    def table(self, title: str, columns: list[str], rows: list[list[str]]) -> None:
        """Output rows under ``title``; JSON mode stores them by lowercased title.

        An empty table prints a dim placeholder line in human mode.
        """
        if self.json_mode:
            self._data[title.lower()] = [dict(zip(columns, row)) for row in rows]
        elif not rows:
            self.console.print(f"[dim]No {title.lower()} found[/dim]")
        else:
            table = Table(title=title, show_header=True, header_style="bold")
            for col in columns:
                table.add_column(col)
            for row in rows:
                table.add_row(*row)
            self.console.print(table)

    def set_data(self, key: str, value: Any) -> None:
        self._data[key] = value

    def set_exit_code(self, exit_code: int) -> None:
        self._exit_code = exit_code

    def finish(self) -> int:
        """Print the collected JSON document (JSON mode) and return the exit code."""
        if self.json_mode:
            self._data["exit_code"] = self._exit_code
            print(json.dumps(self._data, indent=2, default=str))

        return self._exit_code


def parse_module_token(token: str) -> Module:
    """Parse ``CODE:MC`` (e.g. ``CS2040S:4``); MC defaults to 4 when omitted.

    Raises:
        ValueError: If the credit part is not a number.
    """
    code, sep, mc = token.partition(":")
    if not code:
        raise ValueError(f"Invalid module {token!r}: missing module code")
    if not sep:
        return Module(code, 4)
    try:
        value = float(mc)
    except ValueError:
        raise ValueError(f"Invalid module {token!r}: MC must be a number") from None
    return Module(code, int(value) if value.is_integer() else value)


def load_modules_file(path: Path) -> list[Module]:
    """Load a YAML list of ``[code, mc]`` pairs or ``{code, mc}`` mappings.

    Raises:
        ValueError: If the file does not hold a list of modules.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"{path}: invalid YAML ({e})") from e
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of modules")
    try:
        return to_modules(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"{path}: invalid module entry ({e})") from e


def format_validation_for_json(result: ValidationResult) -> dict[str, Any]:
    """Convert ValidationResult to JSON-serializable dict."""
    return {
        "valid": result.valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "errors": [e.model_dump(exclude={"severity"}) for e in result.errors],
        "warnings": [w.model_dump(exclude={"severity"}) for w in result.warnings],
    }
