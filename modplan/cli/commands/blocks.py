"""Blocks command: list the identifiers in a Directory."""

from pathlib import Path

import typer

from ..app import app, console, get_json_mode
from ..utils import Output
from ._common import load_directory_or_report, resolve_directory_path


@app.command("blocks")
def blocks_command(
    blocks_dir: Path | None = typer.Option(
        None, "--blocks-dir", "-b", help="Folder of block YAML files"
    ),
    directory: str | None = typer.Option(
        None, "--directory", "-d", help="Directory (sub-folder) to load, e.g. primary"
    ),
    selectable: bool = typer.Option(
        False, "--selectable", help="Only list blocks flagged isSelectable"
    ),
):
    """
    List block identifiers.

    EXAMPLES:
        modplan blocks
        modplan blocks --directory minor --selectable
    """
    out = Output(console=console, json_mode=get_json_mode())

    path = resolve_directory_path(blocks_dir, directory)
    loaded = load_directory_or_report(path, out)
    if loaded is None:
        raise typer.Exit(out.finish())

    ids = loaded.retrieve_selectable() if selectable else sorted(loaded)
    rows = [[block_id, loaded.blocks[block_id].name or ""] for block_id in ids]
    out.table("Blocks", ["Id", "Name"], rows)
    raise typer.Exit(out.finish())
