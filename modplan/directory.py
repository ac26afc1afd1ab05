"""Block namespace with prefix-based identifier resolution.

A Directory maps fully-qualified block identifiers ('/'-delimited paths) to
flattened blocks. Nested block literals are decomposed on registration, so
``add_block("cs", {"core": {...}})`` registers both ``cs`` and ``cs/core``.
Cross-references between blocks are plain identifiers resolved on demand,
which lets blocks reference each other freely.

The Directory is built once (single writer) and only read afterwards.
"""

import logging
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .core.models import Block
from .errors import BlockNotFoundError, DuplicateIdentifierError

logger = logging.getLogger(__name__)


def join_id(prefix: str, block_id: str) -> str:
    """Join a namespace prefix and a relative identifier."""
    if not prefix:
        return block_id
    return f"{prefix}/{block_id}"


class Directory:
    """Flat, resolvable namespace of requirement blocks."""

    def __init__(self):
        self._blocks: dict[str, Block] = {}
        self._selectable: set[str] = set()

    @property
    def blocks(self) -> Mapping[str, Block]:
        """Read-only view of the registered blocks."""
        return MappingProxyType(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._blocks

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[str]:
        return iter(self._blocks)

    def add_block(self, prefix: str, block: Block | dict[str, Any] | None) -> None:
        """Register ``block`` under ``prefix`` and its sub-blocks beneath it.

        Registration is all-or-nothing: every identifier is checked before
        any is added.

        Raises:
            DuplicateIdentifierError: If any resulting identifier already exists.
        """
        block = Block.from_raw(block)
        main, flat_subblocks = block.decompose()

        entries: dict[str, Block] = {prefix: main}
        for rel_id, sub in flat_subblocks.items():
            entries[join_id(prefix, rel_id)] = sub

        for block_id in entries:
            if block_id in self._blocks:
                raise DuplicateIdentifierError(block_id)

        for block_id, entry in entries.items():
            self._blocks[block_id] = entry
            if entry.is_selectable:
                self._selectable.add(block_id)
            logger.debug("Registered block '%s'", block_id)

    def find(self, prefix: str, block_id: str) -> tuple[str, Block]:
        """Resolve a possibly-relative identifier.

        The identifier is first tried as fully qualified, then relative to
        ``prefix``.

        Returns:
            (full identifier, block)

        Raises:
            BlockNotFoundError: If neither candidate is registered.
        """
        if block_id in self._blocks:
            return block_id, self._blocks[block_id]

        prefixed = join_id(prefix, block_id)
        if prefixed in self._blocks:
            logger.debug("Resolved '%s' relative to '%s'", block_id, prefix)
            return prefixed, self._blocks[prefixed]

        candidates = [block_id] if prefixed == block_id else [block_id, prefixed]
        raise BlockNotFoundError(block_id, candidates)

    def retrieve_selectable(self) -> list[str]:
        """Identifiers of every block flagged selectable."""
        return sorted(self._selectable)
