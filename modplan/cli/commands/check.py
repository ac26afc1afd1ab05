"""Check command: evaluate modules against a requirement block."""

from pathlib import Path

import typer

from ...api import check_block
from ...config import get_config
from ...core.models import Module
from ...errors import (
    BlockNotFoundError,
    CircularReferenceError,
    MalformedInequalityError,
    MalformedRuleTreeError,
)
from ..app import app, console, get_json_mode
from ..display import display_result
from ..utils import ExitCode, Output, load_modules_file, parse_module_token
from ._common import load_directory_or_report, resolve_directory_path


@app.command("check")
def check_command(
    block_id: str = typer.Argument(..., help="Identifier of the block to check"),
    modules: list[str] | None = typer.Argument(
        None, help="Completed modules as CODE:MC (e.g. CS2040S:4)"
    ),
    modules_file: Path | None = typer.Option(
        None, "--modules", "-m", help="YAML file listing completed modules"
    ),
    blocks_dir: Path | None = typer.Option(
        None, "--blocks-dir", "-b", help="Folder of block YAML files"
    ),
    directory: str | None = typer.Option(
        None, "--directory", "-d", help="Directory (sub-folder) to load, e.g. primary"
    ),
    no_infos: bool = typer.Option(
        False, "--no-infos", help="Hide block info text for satisfied requirements"
    ),
):
    """
    Check whether completed modules satisfy a requirement block.

    EXIT CODES:
        0 = Requirements met
        1 = Invalid block files or module list
        3 = Block folder or modules file not found
        4 = Requirements not met
        5 = Evaluation error (unknown block, malformed rule)

    EXAMPLES:
        modplan check cs-hons-2020 CS1101S:4 CS1231S:4 CS2030S:4
        modplan check cs-hons-2020 --modules taken.yaml --directory primary
    """
    out = Output(console=console, json_mode=get_json_mode())

    module_list: list[Module] = []
    try:
        module_list.extend(parse_module_token(token) for token in modules or [])
        if modules_file is not None:
            if not modules_file.exists():
                out.error(
                    f"File not found: {modules_file}",
                    exit_code=ExitCode.FILE_NOT_FOUND,
                )
                raise typer.Exit(out.finish())
            module_list.extend(load_modules_file(modules_file))
    except ValueError as e:
        out.error(str(e))
        raise typer.Exit(out.finish())

    path = resolve_directory_path(blocks_dir, directory)
    loaded = load_directory_or_report(path, out)
    if loaded is None:
        raise typer.Exit(out.finish())

    try:
        result = check_block(loaded, block_id, module_list)
    except (
        BlockNotFoundError,
        CircularReferenceError,
        MalformedInequalityError,
        MalformedRuleTreeError,
    ) as e:
        out.error(str(e), exit_code=ExitCode.EVALUATION_ERROR)
        raise typer.Exit(out.finish())

    if out.json_mode:
        out.set_data("block", block_id)
        out.set_data("satisfied", result.satisfied)
        out.set_data("result", result.model_dump(mode="json"))
    else:
        display_result(block_id, result, show_infos=not no_infos and get_config().show_infos)

    if not result.satisfied:
        out.set_exit_code(ExitCode.NOT_SATISFIED)
    raise typer.Exit(out.finish())
