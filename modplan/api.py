"""High-level entry points.

Example:
    from modplan import Directory, check_block

    directory = Directory()
    directory.add_block("cs", {"match": "CS*", "satisfy": {"mc": ">=8"}})
    result = check_block(directory, "cs", [("CS1101S", 4), ("CS1231S", 4)])
    assert result.satisfied
"""

import logging
from typing import Iterable

from .core.models import SatisfierResult, to_modules
from .directory import Directory
from .satisfier import block_satisfier, evaluate_satisfier

logger = logging.getLogger(__name__)


def check_block(
    directory: Directory, block_id: str, modules: Iterable
) -> SatisfierResult:
    """Check whether ``modules`` meet the requirements of ``block_id``.

    Each call is a fresh evaluation; nothing is cached between calls.

    Raises:
        BlockNotFoundError: If ``block_id`` (or a block it references) is unknown.
        MalformedInequalityError: If an ``mc`` bound is malformed.
        CircularReferenceError: If block references loop.
    """
    module_list = to_modules(modules)
    satisfier = block_satisfier(directory, "", block_id)
    result = evaluate_satisfier(module_list, satisfier)
    logger.info(
        "Block '%s' %s with %d modules",
        block_id,
        "satisfied" if result.satisfied else "not satisfied",
        len(module_list),
    )
    return result
