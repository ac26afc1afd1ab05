"""Matcher evaluation.

``evaluate_matcher`` partitions a candidate list into ``matched`` and
``remaining``, both in input order. Branch nodes hand their pool to each
child in turn, so earlier children have first claim; predicate nodes
(pattern/and/or) test every module of the pool independently.
"""

import logging

from ..core.models import MatcherResult, Module
from ..errors import MalformedRuleTreeError
from .types import Matcher

logger = logging.getLogger(__name__)

_Pool = list[tuple[int, Module]]


def _selects(matcher: Matcher, module: Module) -> bool:
    """Per-module predicate for pattern/and/or/exclude nodes.

    An ``and``/``or`` node selects a module when its non-exclude children do
    (all of them for ``and``, any for ``or``) and none of its exclude children
    do. Exclusion only carves from what other children select, so a
    combinator made only of excludes selects nothing, like a bare exclude.
    """
    if matcher.kind == "pattern":
        return matcher.regex.match(module.code) is not None
    if matcher.kind == "exclude":
        return _selects(matcher.matcher, module)
    if matcher.kind in ("and", "or"):
        included = [m for m in matcher.matchers if m.kind != "exclude"]
        excluded = [m for m in matcher.matchers if m.kind == "exclude"]
        if not included or any(_selects(m, module) for m in excluded):
            return False
        if matcher.kind == "and":
            return all(_selects(m, module) for m in included)
        return any(_selects(m, module) for m in included)
    raise MalformedRuleTreeError("matcher", matcher)


def _result(
    matcher: Matcher,
    matched: _Pool,
    remaining: _Pool,
    infos: list[str],
    results: list[MatcherResult],
) -> MatcherResult:
    return MatcherResult(
        kind=matcher.kind,
        ref=matcher.ref,
        matched=[m for _, m in matched],
        remaining=[m for _, m in remaining],
        infos=infos,
        results=results,
    )


def _evaluate(pool: _Pool, matcher: Matcher) -> tuple[_Pool, _Pool, MatcherResult]:
    if matcher.kind == "branch":
        claimed: _Pool = []
        rest = pool
        infos: list[str] = []
        results: list[MatcherResult] = []
        for child in matcher.matchers:
            child_matched, rest, child_result = _evaluate(rest, child)
            claimed.extend(child_matched)
            infos.extend(child_result.infos)
            results.append(child_result)
        claimed.sort(key=lambda entry: entry[0])
        return claimed, rest, _result(matcher, claimed, rest, infos, results)

    if matcher.kind == "exclude":
        # A bare exclude has nothing to carve from, so it selects nothing.
        _, _, child_result = _evaluate(pool, matcher.matcher)
        return [], pool, _result(matcher, [], pool, [], [child_result])

    matched = [entry for entry in pool if _selects(matcher, entry[1])]
    rest = [entry for entry in pool if not _selects(matcher, entry[1])]

    infos = []
    results = []
    if matcher.kind == "pattern":
        if matched and matcher.info is not None:
            infos.append(matcher.info)
    else:
        matched_codes = {m.code for _, m in matched}
        for child in matcher.matchers:
            _, _, child_result = _evaluate(pool, child)
            results.append(child_result)
            if child.kind != "exclude" and any(
                m.code in matched_codes for m in child_result.matched
            ):
                infos.extend(child_result.infos)
    return matched, rest, _result(matcher, matched, rest, infos, results)


def evaluate_matcher(modules: list[Module], matcher: Matcher) -> MatcherResult:
    """Partition ``modules`` into those the matcher claims and the rest."""
    pool = [(i, Module(*m)) for i, m in enumerate(modules)]
    _, _, result = _evaluate(pool, matcher)
    logger.debug(
        "Matcher '%s' claimed %d of %d modules",
        matcher.ref,
        len(result.matched),
        len(modules),
    )
    return result
