"""Satisfier evaluation.

Every node reports whether it is satisfied, the module list associated with
it, and either infos (satisfied) or messages (unsatisfied), never both. A
failed branch drops the infos of its children so that a failed subtree never
reports positive messaging. Filter children narrow the modules seen by
later siblings but take no part in the branch's reduction.
"""

import logging

from ..core.models import Module, SatisfierResult
from ..errors import MalformedRuleTreeError
from .types import ConstraintOutcome, Satisfier

logger = logging.getLogger(__name__)


def _without(pool: list[Module], claimed: list[Module]) -> list[Module]:
    """Remove one occurrence of each claimed module from ``pool``."""
    rest = list(pool)
    for module in claimed:
        if module in rest:
            rest.remove(module)
    return rest


def _finish(
    satisfier: Satisfier,
    satisfied: bool,
    assigned: list[Module],
    infos: list[str],
    messages: list[str],
    results: list[SatisfierResult],
) -> SatisfierResult:
    return SatisfierResult(
        kind=satisfier.kind,
        ref=satisfier.ref,
        satisfied=satisfied,
        assigned=assigned,
        infos=infos if satisfied else [],
        messages=[] if satisfied else messages,
        results=results,
    )


def evaluate_satisfier(
    assigned: list[Module],
    satisfier: Satisfier,
    remaining: list[Module] | None = None,
) -> SatisfierResult:
    """Evaluate a satisfier tree against the assigned modules.

    Args:
        assigned: Modules assigned to the node being checked.
        satisfier: Tree to evaluate.
        remaining: Unassigned pool available to assign leaves.
    """
    assigned = list(assigned)
    remaining = list(remaining or [])

    if satisfier.kind == "constraint":
        outcome = satisfier.constraint(assigned)
        if not isinstance(outcome, ConstraintOutcome):
            outcome = ConstraintOutcome(satisfied=bool(outcome))
        context = outcome.context
        infos = list(satisfier.infos) + (context.infos if context else [])
        messages = [satisfier.message] if satisfier.message else []
        if context:
            messages.extend(context.messages)
        return _finish(
            satisfier,
            outcome.satisfied,
            assigned,
            infos,
            messages,
            [context] if context else [],
        )

    if satisfier.kind == "filter":
        return _finish(satisfier, True, satisfier.filter(assigned), [], [], [])

    if satisfier.kind == "assign":
        claimed = satisfier.assign(remaining)
        messages = [satisfier.message] if satisfier.message else []
        return _finish(
            satisfier,
            bool(claimed),
            assigned + claimed,
            list(satisfier.infos),
            messages,
            [],
        )

    if satisfier.kind == "branch":
        working = satisfier.filter(assigned) if satisfier.filter else assigned
        results: list[SatisfierResult] = []
        for child in satisfier.satisfiers:
            result = evaluate_satisfier(working, child, remaining)
            results.append(result)
            if child.kind == "filter":
                working = result.assigned
            elif child.kind == "assign":
                claimed = result.assigned[len(working) :]
                remaining = _without(remaining, claimed)
                working = result.assigned

        # A branch of filters alone is vacuously satisfied.
        outcomes = [
            r.satisfied
            for child, r in zip(satisfier.satisfiers, results)
            if child.kind != "filter"
        ]
        satisfied = satisfier.reduce(outcomes) if outcomes else True
        infos = [info for r in results for info in r.infos]
        messages = [satisfier.message] if satisfier.message else []
        messages.extend(msg for r in results for msg in r.messages)
        logger.debug(
            "Satisfier '%s' %s", satisfier.ref, "passed" if satisfied else "failed"
        )
        return _finish(satisfier, satisfied, working, infos, messages, results)

    raise MalformedRuleTreeError("satisfier", satisfier)
