"""Load block definitions from YAML files into Directories.

Each ``*.yml`` / ``*.yaml`` file holds one root block. Its identifier is the
file name without extension, wherever the file sits beneath the root folder:
``primary/cs-hons-2020/cs-hons-2020-ai.yml`` becomes ``cs-hons-2020-ai``.
Two files with the same name collide.
"""

import logging
from pathlib import Path
from typing import Any, Callable

import yaml

from .core.models import Block
from .directory import Directory
from .errors import BlockLoadError
from .validator import parse_block

logger = logging.getLogger(__name__)

BLOCK_SUFFIXES = (".yml", ".yaml")

Validate = Callable[[Any], Block]


def path_to_block_id(path: Path) -> str:
    """Identifier of the block stored at ``path``: its file name without extension."""
    return path.stem


def iter_block_files(root: Path) -> list[Path]:
    """Block files beneath ``root``, sorted for a deterministic load order."""
    return sorted(
        p for p in root.rglob("*") if p.is_file() and p.suffix in BLOCK_SUFFIXES
    )


def read_block_file(path: Path | str) -> Any:
    """Read and decode a single block file.

    Raises:
        BlockLoadError: If the file cannot be read or is not a YAML mapping.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise BlockLoadError(path, str(e)) from e

    if not isinstance(data, dict):
        raise BlockLoadError(path, f"unexpected type: {type(data).__name__}")
    return data


def load_directory(root: Path | str, validate: Validate | None = None) -> Directory:
    """Build a Directory from every block file beneath ``root``.

    Args:
        root: Folder holding block files.
        validate: Converts a decoded literal into a Block, raising on invalid
            input. Defaults to schema validation via ``parse_block``.

    Raises:
        BlockLoadError: If ``root`` is missing or a file cannot be decoded.
        BlockValidationError: If a block fails validation.
        DuplicateIdentifierError: If two files produce the same identifier.
    """
    root = Path(root)
    if not root.is_dir():
        raise BlockLoadError(root, "not a directory")

    directory = Directory()
    for path in iter_block_files(root):
        block_id = path_to_block_id(path)
        data = read_block_file(path)
        if validate is None:
            block = parse_block(data, source=str(path))
        else:
            block = validate(data)
        directory.add_block(block_id, block)
        logger.debug("Loaded %s as '%s'", path, block_id)

    logger.info("Loaded %d blocks from %s", len(directory), root)
    return directory


def load_directories(
    root: Path | str, validate: Validate | None = None
) -> dict[str, Directory]:
    """Load each immediate sub-folder of ``root`` (e.g. primary, second, minor)."""
    root = Path(root)
    if not root.is_dir():
        raise BlockLoadError(root, "not a directory")

    return {
        sub.name: load_directory(sub, validate)
        for sub in sorted(root.iterdir())
        if sub.is_dir()
    }
