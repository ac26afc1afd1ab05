"""Result trees produced by matcher and satisfier evaluation."""

from typing import Iterator

from pydantic import BaseModel, Field

from .module import Module


class MatcherResult(BaseModel):
    """Partition of a candidate module list by one matcher node."""

    kind: str
    ref: str = ""
    matched: list[Module] = Field(default_factory=list)
    remaining: list[Module] = Field(default_factory=list)
    infos: list[str] = Field(default_factory=list)
    results: list["MatcherResult"] = Field(default_factory=list)


class SatisfierResult(BaseModel):
    """Outcome of evaluating one satisfier node.

    ``infos`` are only carried by satisfied nodes and ``messages`` only by
    unsatisfied ones.
    """

    kind: str
    ref: str = ""
    satisfied: bool
    assigned: list[Module] = Field(default_factory=list)
    infos: list[str] = Field(default_factory=list)
    messages: list[str] = Field(default_factory=list)
    results: list["SatisfierResult"] = Field(default_factory=list)

    def walk(self, depth: int = 0) -> Iterator[tuple[int, "SatisfierResult"]]:
        """Yield ``(depth, node)`` pairs depth-first."""
        yield depth, self
        for child in self.results:
            yield from child.walk(depth + 1)

    def failed_refs(self) -> list[str]:
        """Refs of every unsatisfied node, depth-first."""
        return [node.ref for _, node in self.walk() if not node.satisfied]


MatcherResult.model_rebuild()
SatisfierResult.model_rebuild()
