"""modplan: verify completed modules against hierarchical degree requirements.

Requirements are authored as nested blocks of match rules (which modules
count), assign lists (which sub-blocks get first claim) and satisfy rules
(credit bounds, boolean combinators and references to other blocks).
"""

from .api import check_block
from .core.models import Block, MatcherResult, Module, SatisfierResult
from .directory import Directory
from .errors import (
    BlockLoadError,
    BlockNotFoundError,
    BlockValidationError,
    CircularReferenceError,
    DuplicateIdentifierError,
    MalformedInequalityError,
    MalformedRuleTreeError,
    ModplanError,
)
from .loader import load_directories, load_directory

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "check_block",
    "Block",
    "MatcherResult",
    "Module",
    "SatisfierResult",
    "Directory",
    "BlockLoadError",
    "BlockNotFoundError",
    "BlockValidationError",
    "CircularReferenceError",
    "DuplicateIdentifierError",
    "MalformedInequalityError",
    "MalformedRuleTreeError",
    "ModplanError",
    "load_directories",
    "load_directory",
]
