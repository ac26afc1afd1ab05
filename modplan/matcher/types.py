"""Matcher tree nodes.

Matcher trees are built fresh for each evaluation and never mutated. Every
node carries an explicit ``kind`` used for dispatch:

- ``branch``: children claim modules one after another; a module claimed by
  an earlier child is unavailable to later ones (assign priority).
- ``pattern``: selects modules whose code matches a compiled pattern.
- ``and`` / ``or``: per-module predicate combinators over their children.
- ``exclude``: inside ``and``/``or``, removes what its child selects.
"""

import re
from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True)
class MatcherBranch:
    matchers: tuple["Matcher", ...]
    ref: str = ""
    kind: Literal["branch"] = "branch"


@dataclass(frozen=True)
class PatternMatcher:
    pattern: str
    regex: re.Pattern
    ref: str = ""
    info: str | None = None
    kind: Literal["pattern"] = "pattern"


@dataclass(frozen=True)
class AndMatcher:
    matchers: tuple["Matcher", ...]
    ref: str = ""
    kind: Literal["and"] = "and"


@dataclass(frozen=True)
class OrMatcher:
    matchers: tuple["Matcher", ...]
    ref: str = ""
    kind: Literal["or"] = "or"


@dataclass(frozen=True)
class ExcludeMatcher:
    matcher: "Matcher"
    ref: str = ""
    kind: Literal["exclude"] = "exclude"


Matcher = Union[MatcherBranch, PatternMatcher, AndMatcher, OrMatcher, ExcludeMatcher]
