"""Credit-count inequalities.

``">=N"`` is a constraint: the assigned modules must total at least N MCs.
``"<=N"`` is a filter: only the first N MCs' worth of modules, in listed
order, count toward the enclosing rule. The cut-off keeps every module whose
preceding running total is still below N, so it lands exactly on N when some
prefix sums to N and otherwise includes the module that pushes the total
past N.
"""

import re
from dataclasses import dataclass
from enum import Enum

from ..core.models import Module, total_mcs
from ..errors import MalformedInequalityError
from .types import Satisfier, SatisfierLeafConstraint, SatisfierLeafFilter

_INEQUALITY_RE = re.compile(r"([<>]=)([0-9]+)")


class InequalitySign(str, Enum):
    AT_LEAST = "AT_LEAST"
    AT_MOST = "AT_MOST"


@dataclass(frozen=True)
class Inequality:
    sign: InequalitySign
    bound: int

    def __str__(self) -> str:
        symbol = ">=" if self.sign == InequalitySign.AT_LEAST else "<="
        return f"{symbol}{self.bound}"


def parse_inequality(text: str) -> Inequality:
    """Parse ``"<=N"`` / ``">=N"``.

    Raises:
        MalformedInequalityError: For any other form.
    """
    match = _INEQUALITY_RE.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise MalformedInequalityError(text)

    symbol, number = match.groups()
    sign = InequalitySign.AT_MOST if symbol == "<=" else InequalitySign.AT_LEAST
    return Inequality(sign=sign, bound=int(number))


def take_within(modules: list[Module], bound: int) -> list[Module]:
    """Truncate ``modules`` at the first running total reaching ``bound``."""
    kept: list[Module] = []
    running = 0
    for module in modules:
        if running >= bound:
            break
        kept.append(module)
        running += module[1]
    return kept


def inequality_satisfier(ref: str, text: str) -> Satisfier:
    """Build the satisfier leaf for an ``mc`` bound."""
    inequality = parse_inequality(text)
    n = inequality.bound

    if inequality.sign == InequalitySign.AT_LEAST:
        return SatisfierLeafConstraint(
            constraint=lambda assigned: total_mcs(assigned) >= n,
            ref=ref,
            message=f"modules do not meet minimum MC requirement of {n}",
        )
    return SatisfierLeafFilter(filter=lambda assigned: take_within(assigned, n), ref=ref)
