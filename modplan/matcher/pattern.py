"""Module code patterns.

Patterns are uppercase module codes with two wildcards: ``x`` stands for a
single digit and ``*`` for any (possibly empty) run of uppercase letters and
digits. ``MA2xxx*`` matches ``MA2101`` and ``MA2101S`` but not ``MA1101``.
"""

import re
from functools import lru_cache

_WILDCARDS = {"x": "[0-9]", "*": "[A-Z0-9]*"}


def pattern_to_regex_source(pattern: str) -> str:
    return "".join(_WILDCARDS.get(ch, re.escape(ch)) for ch in pattern)


@lru_cache(maxsize=1024)
def pattern_to_regex(*patterns: str) -> re.Pattern:
    """Compile one or more patterns into a single anchored, case-sensitive regex."""
    source = "|".join(pattern_to_regex_source(p) for p in patterns)
    return re.compile(f"^(?:{source})$")


def matches_pattern(pattern: str, code: str) -> bool:
    return pattern_to_regex(pattern).match(code) is not None
