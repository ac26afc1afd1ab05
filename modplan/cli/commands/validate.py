"""Validate command for block files."""

from pathlib import Path

import typer

from ...core.models import Block, ValidationResult
from ...directory import Directory
from ...errors import BlockLoadError, DuplicateIdentifierError
from ...loader import iter_block_files, path_to_block_id, read_block_file
from ...validator import validate_block, validate_references
from ..app import app, console, get_json_mode
from ..utils import ExitCode, Output, format_validation_for_json


def _report(result: ValidationResult, source: str, out: Output) -> None:
    for issue in result.errors:
        out.error(issue.message, location=f"{source}: {issue.location}", suggestion=issue.suggestion)
    for issue in result.warnings:
        out.warning(issue.message, location=f"{source}: {issue.location}", suggestion=issue.suggestion)


@app.command("validate")
def validate_command(
    path: Path = typer.Argument(..., help="Block file, or folder of block files"),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors"),
):
    """
    Validate block files against the rule schema.

    For a folder, block references are also checked to resolve.

    EXIT CODES:
        0 = Success (all blocks valid)
        1 = Validation error
        3 = File not found

    EXAMPLES:
        modplan validate blocks/primary/cs-hons-2020.yml
        modplan validate blocks/primary --strict
    """
    out = Output(console=console, json_mode=get_json_mode())

    if not path.exists():
        out.error(
            f"File not found: {path}",
            exit_code=ExitCode.FILE_NOT_FOUND,
            suggestion=f"Check the file path: {path.absolute()}",
        )
        raise typer.Exit(out.finish())

    files = iter_block_files(path) if path.is_dir() else [path]

    combined = ValidationResult()
    directory = Directory()
    failures = 0
    for file in files:
        try:
            data = read_block_file(file)
        except BlockLoadError as e:
            out.error(str(e))
            failures += 1
            continue
        result = validate_block(data)
        _report(result, str(file), out)
        combined.extend(result)
        if result.valid and path.is_dir():
            try:
                directory.add_block(path_to_block_id(file), Block.from_raw(data))
            except DuplicateIdentifierError as e:
                out.error(str(e), location=str(file))
                failures += 1

    if path.is_dir():
        references = validate_references(directory)
        _report(references, str(path), out)
        combined.extend(references)

    if strict and combined.warnings:
        out.set_exit_code(ExitCode.VALIDATION_ERROR)
    out.set_data("validation", format_validation_for_json(combined))
    if combined.valid and not failures and not (strict and combined.warnings):
        out.success(f"{len(files)} block file(s) valid", files=len(files))
    raise typer.Exit(out.finish())
