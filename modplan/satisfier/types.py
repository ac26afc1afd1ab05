"""Satisfier tree nodes.

- ``branch``: evaluates its children against a (optionally narrowed) module
  list and reduces their outcomes with ``reduce`` (``all`` or ``any``).
- ``constraint``: a predicate over the assigned modules.
- ``filter``: narrows the assigned modules seen by later siblings.
- ``assign``: claims modules from the remaining unassigned pool.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Literal, Union

from ..core.models import Module, SatisfierResult


@dataclass(frozen=True)
class ConstraintOutcome:
    satisfied: bool
    context: SatisfierResult | None = None


@dataclass(frozen=True)
class SatisfierBranch:
    satisfiers: tuple["Satisfier", ...]
    reduce: Callable[[Iterable[bool]], bool] = all
    filter: Callable[[list[Module]], list[Module]] | None = None
    ref: str = ""
    message: str | None = None
    kind: Literal["branch"] = "branch"


@dataclass(frozen=True)
class SatisfierLeafConstraint:
    constraint: Callable[[list[Module]], ConstraintOutcome | bool]
    ref: str = ""
    message: str | None = None
    infos: tuple[str, ...] = ()
    kind: Literal["constraint"] = "constraint"


@dataclass(frozen=True)
class SatisfierLeafFilter:
    filter: Callable[[list[Module]], list[Module]]
    ref: str = ""
    kind: Literal["filter"] = "filter"


@dataclass(frozen=True)
class SatisfierLeafAssign:
    assign: Callable[[list[Module]], list[Module]]
    ref: str = ""
    message: str | None = None
    infos: tuple[str, ...] = ()
    kind: Literal["assign"] = "assign"


Satisfier = Union[
    SatisfierBranch, SatisfierLeafConstraint, SatisfierLeafFilter, SatisfierLeafAssign
]
