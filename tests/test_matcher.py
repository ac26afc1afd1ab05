"""Tests for pattern compilation, matcher construction and evaluation."""

import pytest

from modplan import Directory
from modplan.core.models import Module
from modplan.errors import CircularReferenceError, MalformedRuleTreeError
from modplan.matcher import (
    block_matcher,
    evaluate_matcher,
    match_rule_matcher,
    matches_pattern,
    pattern_to_regex,
)


def codes(modules):
    return [m.code for m in modules]


class TestPatterns:
    """Tests for module code wildcard patterns."""

    @pytest.mark.parametrize(
        "pattern,code,expected",
        [
            ("MA2xxx*", "MA2101", True),
            ("MA2xxx*", "MA2101S", True),
            ("MA2xxx*", "MA1101", False),
            ("MA2xxx*", "MA210", False),
            ("CS2040S", "CS2040S", True),
            ("CS2040S", "CS2040", False),
            ("CS*", "CS", True),
            ("CS1xxx", "cs1101", False),
            ("GEx*", "GEQ1000", False),
        ],
    )
    def test_matches_pattern(self, pattern, code, expected):
        assert matches_pattern(pattern, code) is expected

    def test_patterns_are_anchored(self):
        assert not matches_pattern("CS1xxx", "XCS1101")
        assert not matches_pattern("CS1xxx", "CS1101S")

    def test_multiple_patterns_compile_to_one_regex(self):
        regex = pattern_to_regex("CS1xxx*", "MA*")
        assert regex.match("CS1101S")
        assert regex.match("MA1521")
        assert not regex.match("ST2131")


class TestMatchRuleMatcher:
    """Tests for compiling match rules."""

    def test_exclude_carves_out_of_pattern(self):
        matcher = match_rule_matcher({"and": ["MA2xxx*", {"exclude": "MA23xx*"}]})
        result = evaluate_matcher([("MA2101", 4), ("MA2311", 4), ("CS1010", 4)], matcher)

        assert codes(result.matched) == ["MA2101"]
        assert codes(result.remaining) == ["MA2311", "CS1010"]

    def test_exclude_inside_or(self):
        matcher = match_rule_matcher(
            {"or": ["MA2xxx*", "ST2xxx", {"exclude": "MA23xx*"}]}
        )
        result = evaluate_matcher(
            [("MA2311", 4), ("ST2131", 4), ("MA2101", 4)], matcher
        )
        assert codes(result.matched) == ["ST2131", "MA2101"]

    def test_bare_exclude_selects_nothing(self):
        matcher = match_rule_matcher({"exclude": "CS*"})
        result = evaluate_matcher([("CS1010", 4), ("MA1521", 4)], matcher)

        assert result.matched == []
        assert codes(result.remaining) == ["CS1010", "MA1521"]

    @pytest.mark.parametrize("kind", ["and", "or"])
    def test_combinator_of_excludes_selects_nothing(self, kind):
        matcher = match_rule_matcher({kind: [{"exclude": "MA23xx*"}]})
        result = evaluate_matcher([("MA2311", 4), ("CS1010", 4)], matcher)

        assert result.matched == []
        assert codes(result.remaining) == ["MA2311", "CS1010"]

    def test_and_requires_every_child(self):
        matcher = match_rule_matcher({"and": ["CS*", "*S"]})
        result = evaluate_matcher(
            [("CS2040S", 4), ("CS1231", 4), ("MA1521S", 4)], matcher
        )
        assert codes(result.matched) == ["CS2040S"]

    def test_list_is_implicit_or(self):
        matcher = match_rule_matcher(["MA*", "ST*"])
        assert matcher.kind == "or"
        result = evaluate_matcher([("ST2131", 4), ("CS2030", 4), ("MA1521", 4)], matcher)
        assert codes(result.matched) == ["ST2131", "MA1521"]

    def test_refs_follow_rule_structure(self):
        matcher = match_rule_matcher({"and": ["CS*", {"exclude": "CS1xxx"}]}, "cs/match")

        assert matcher.ref == "cs/match/and"
        assert matcher.matchers[0].ref == "cs/match/and/0/CS*"
        assert matcher.matchers[1].ref == "cs/match/and/1/exclude"

    def test_pattern_info_reported_only_when_matched(self):
        matcher = match_rule_matcher({"pattern": "CS1xxx*", "info": "Level 1"})

        hit = evaluate_matcher([("CS1101S", 4)], matcher)
        miss = evaluate_matcher([("MA1521", 4)], matcher)

        assert hit.infos == ["Level 1"]
        assert miss.infos == []

    def test_combinator_collects_infos_of_contributing_children(self):
        matcher = match_rule_matcher(
            {
                "or": [
                    {"pattern": "CS*", "info": "computing"},
                    {"pattern": "MA*", "info": "maths"},
                ]
            }
        )
        result = evaluate_matcher([("CS1101S", 4)], matcher)
        assert result.infos == ["computing"]

    @pytest.mark.parametrize("rule", [{"foo": ["CS*"]}, {"and": "CS*"}, 42, None])
    def test_malformed_rule_raises(self, rule):
        with pytest.raises(MalformedRuleTreeError):
            match_rule_matcher(rule)


class TestBlockMatcher:
    """Tests for block matchers with assign priority."""

    def test_assign_claims_in_priority_order(self, cs_directory, sample_modules):
        matcher = block_matcher(cs_directory, "cs", cs_directory.blocks["cs"])
        result = evaluate_matcher(sample_modules, matcher)

        assign = result.results[0]
        core, elective = assign.results
        assert assign.ref == "cs/assign"
        assert codes(core.matched) == ["CS2040S", "CS1231"]
        assert codes(elective.matched) == ["CS2100", "CS2030"]

    def test_claims_are_exclusive(self):
        """A module claimed by an earlier assign child is never seen by later ones."""
        directory = Directory()
        directory.add_block(
            "deg",
            {
                "assign": ["first", "second"],
                "first": {"match": "CS*"},
                "second": {"match": "CS*"},
            },
        )
        matcher = block_matcher(directory, "deg", directory.blocks["deg"])
        result = evaluate_matcher([("CS1101S", 4), ("CS2030", 4)], matcher)

        first, second = result.results[0].results
        assert codes(first.matched) == ["CS1101S", "CS2030"]
        assert second.matched == []

    def test_matched_preserves_input_order(self, cs_directory, sample_modules):
        matcher = block_matcher(cs_directory, "cs", cs_directory.blocks["cs"])
        result = evaluate_matcher(sample_modules, matcher)

        assert codes(result.matched) == ["CS2100", "CS2040S", "CS1231", "CS2030"]
        assert codes(result.remaining) == ["GER1000", "ST2131", "MA1521"]

    def test_match_sees_what_assign_left(self):
        directory = Directory()
        directory.add_block(
            "deg",
            {"assign": ["core"], "match": "CS*", "core": {"match": "CS1xxx*"}},
        )
        matcher = block_matcher(directory, "deg", directory.blocks["deg"])
        result = evaluate_matcher([("CS2030", 4), ("CS1101S", 4), ("MA1521", 4)], matcher)

        assign, match = result.results
        assert codes(assign.matched) == ["CS1101S"]
        assert codes(match.matched) == ["CS2030"]
        assert codes(result.matched) == ["CS2030", "CS1101S"]

    def test_block_without_rules_matches_nothing(self):
        directory = Directory()
        directory.add_block("empty", {})
        matcher = block_matcher(directory, "empty", directory.blocks["empty"])

        result = evaluate_matcher([Module("CS1101S", 4)], matcher)
        assert result.matched == []

    def test_circular_assign_raises(self):
        directory = Directory()
        directory.add_block("a", {"assign": ["b"]})
        directory.add_block("b", {"assign": ["a"]})

        with pytest.raises(CircularReferenceError, match="a -> b -> a"):
            block_matcher(directory, "a", directory.blocks["a"])
