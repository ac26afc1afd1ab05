"""Directory loading shared by commands."""

from pathlib import Path

from ...config import get_config
from ...directory import Directory
from ...errors import BlockLoadError, BlockValidationError, DuplicateIdentifierError
from ...loader import load_directory
from ..utils import ExitCode, Output


def resolve_directory_path(blocks_dir: Path | None, directory: str | None) -> Path:
    """Folder for the requested Directory.

    ``<blocks_dir>/<directory>`` when that folder exists, else ``blocks_dir``
    itself (a flat folder of block files).
    """
    config = get_config()
    root = blocks_dir or config.blocks_path
    candidate = root / (directory or config.directory)
    return candidate if candidate.is_dir() else root


def load_directory_or_report(path: Path, out: Output) -> Directory | None:
    """Load a Directory, reporting failures on ``out``."""
    try:
        return load_directory(path)
    except BlockLoadError as e:
        exit_code = ExitCode.FILE_NOT_FOUND if not Path(e.path).exists() else ExitCode.VALIDATION_ERROR
        out.error(str(e), exit_code=exit_code, suggestion="Set --blocks-dir or `modplan config set blocks_dir <path>`")
    except BlockValidationError as e:
        for issue in e.issues:
            out.error(issue.message, location=f"{e.source}: {issue.location}", suggestion=issue.suggestion)
    except DuplicateIdentifierError as e:
        out.error(str(e))
    return None
