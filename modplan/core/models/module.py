"""Module representation.

A module is the unit assigned to requirement blocks: a course code paired
with its credit weight in Modular Credits (MCs). The engine treats modules
as opaque values and never mutates them.
"""

from typing import Iterable, NamedTuple


class Module(NamedTuple):
    code: str
    mc: int | float


def to_modules(pairs: Iterable) -> list[Module]:
    """Coerce ``(code, mc)`` pairs or ``{"code", "mc"}`` mappings into Modules."""
    modules: list[Module] = []
    for pair in pairs:
        if isinstance(pair, Module):
            modules.append(pair)
        elif isinstance(pair, dict):
            modules.append(Module(str(pair["code"]), pair["mc"]))
        else:
            code, mc = pair
            modules.append(Module(str(code), mc))
    return modules


def total_mcs(modules: Iterable[Module]) -> int | float:
    """Sum of credit weights across a module list."""
    return sum(mc for _, mc in modules)
