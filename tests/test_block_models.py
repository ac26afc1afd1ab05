"""Tests for Block and rule models."""

import pytest

from modplan.core.models import (
    AndMatchRule,
    AndSatisfyRule,
    Block,
    BlockRefSatisfyRule,
    ExcludeMatchRule,
    MCSatisfyRule,
    Module,
    OrMatchRule,
    OrSatisfyRule,
    PatternMatchRule,
    SatisfierResult,
    parse_match_rule,
    parse_satisfy_rule,
    to_modules,
    total_mcs,
)
from modplan.errors import MalformedRuleTreeError


class TestBlock:
    """Tests for building blocks from authored literals."""

    def test_single_values_become_lists(self):
        block = Block.from_raw(
            {"name": "CS", "assign": "core", "match": "CS*", "satisfy": {"mc": ">=8"}}
        )

        assert block.assign == ["core"]
        assert block.match == [PatternMatchRule(pattern="CS*")]
        assert block.satisfy == [MCSatisfyRule(mc=">=8")]

    def test_extra_keys_become_subblocks(self):
        block = Block.model_validate(
            {"name": "CS", "core": {"match": ["CS1xxx*"]}, "empty": None}
        )

        assert set(block.subblocks) == {"core", "empty"}
        assert block.subblocks["core"].match == [PatternMatchRule(pattern="CS1xxx*")]
        assert block.subblocks["empty"] == Block()

    def test_is_selectable_alias(self):
        assert Block.from_raw({"isSelectable": True}).is_selectable
        assert not Block.from_raw({}).is_selectable

    def test_field_names_are_ordinary_subblock_keys(self):
        """Only the authored property names are reserved."""
        block = Block.from_raw({"subblocks": {"match": "CS*"}, "is_selectable": {}})

        assert set(block.subblocks) == {"subblocks", "is_selectable"}
        assert block.subblocks["subblocks"].match == [PatternMatchRule(pattern="CS*")]
        assert not block.is_selectable

    def test_snake_case_selectable_is_not_a_property(self):
        with pytest.raises(MalformedRuleTreeError):
            Block.from_raw({"is_selectable": True})

    def test_decompose_nested(self):
        block = Block.from_raw({"a": {"b": {"name": "deep"}}, "c": {}})
        main, descendants = block.decompose()

        assert main.subblocks == {}
        assert set(descendants) == {"a", "a/b", "c"}
        assert descendants["a/b"].name == "deep"
        assert descendants["a"].subblocks == {}

    def test_non_mapping_block_raises(self):
        with pytest.raises(MalformedRuleTreeError):
            Block.from_raw("CS*")

    def test_non_mapping_subblock_raises(self):
        with pytest.raises(MalformedRuleTreeError):
            Block.from_raw({"core": "CS*"})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "cs.yml"
        path.write_text("name: CS\nmatch: CS*\ncore:\n  satisfy:\n    mc: '>=8'\n")

        block = Block.from_yaml(path)

        assert block.name == "CS"
        assert block.subblocks["core"].satisfy == [MCSatisfyRule(mc=">=8")]

    def test_label(self):
        assert Block(name="Computing").label("cs") == "Computing"
        assert Block().label("cs") == "cs"


class TestMatchRules:
    """Tests for parse_match_rule."""

    def test_pattern_object_with_info(self):
        rule = parse_match_rule({"pattern": "CS3xxx", "info": "Level 3"})
        assert rule == PatternMatchRule(pattern="CS3xxx", info="Level 3")

    def test_nested_shapes(self):
        rule = parse_match_rule({"and": ["MA2xxx*", {"exclude": {"or": ["MA23xx*"]}}]})

        assert isinstance(rule, AndMatchRule)
        assert isinstance(rule.rules[1], ExcludeMatchRule)
        assert isinstance(rule.rules[1].rule, OrMatchRule)

    def test_tagged_form(self):
        rule = parse_match_rule({"kind": "or", "rules": [{"kind": "pattern", "pattern": "CS*"}]})
        assert rule == OrMatchRule(rules=[PatternMatchRule(pattern="CS*")])

    def test_typed_rule_passes_through(self):
        rule = PatternMatchRule(pattern="CS*")
        assert parse_match_rule(rule) is rule

    @pytest.mark.parametrize("raw", [{"foo": "CS*"}, {"or": "CS*"}, {"pattern": 3}, 3.5])
    def test_malformed(self, raw):
        with pytest.raises(MalformedRuleTreeError):
            parse_match_rule(raw)


class TestSatisfyRules:
    """Tests for parse_satisfy_rule."""

    def test_shapes(self):
        assert parse_satisfy_rule("core") == BlockRefSatisfyRule(block="core")
        assert parse_satisfy_rule({"mc": ">=8"}) == MCSatisfyRule(mc=">=8")
        assert parse_satisfy_rule({"or": ["a", "b"]}) == OrSatisfyRule(
            rules=[BlockRefSatisfyRule(block="a"), BlockRefSatisfyRule(block="b")]
        )
        assert isinstance(parse_satisfy_rule(["a", {"mc": "<=4"}]), AndSatisfyRule)

    @pytest.mark.parametrize("raw", [{"mc": 8}, {"pattern": "CS*"}, 8, None])
    def test_malformed(self, raw):
        with pytest.raises(MalformedRuleTreeError):
            parse_satisfy_rule(raw)


class TestModules:
    """Tests for module helpers."""

    def test_to_modules_accepts_mixed_shapes(self):
        modules = to_modules(
            [("CS1101S", 4), {"code": "MA1521", "mc": 4}, Module("ST2131", 4)]
        )
        assert [m.code for m in modules] == ["CS1101S", "MA1521", "ST2131"]
        assert all(isinstance(m, Module) for m in modules)

    def test_total_mcs(self, sample_modules):
        assert total_mcs(sample_modules) == 28
        assert total_mcs([]) == 0

    def test_whole_credits_stay_integers(self):
        """Integral MCs serialize as integers, fractional ones as floats."""
        result = SatisfierResult(
            kind="branch", satisfied=True, assigned=[("CS1101S", 4), ("GEX1000", 2.5)]
        )

        assert result.assigned[0] == Module("CS1101S", 4)
        assert type(result.assigned[0].mc) is int
        dumped = result.model_dump(mode="json")["assigned"]
        assert dumped == [["CS1101S", 4], ["GEX1000", 2.5]]
        assert type(dumped[0][1]) is int
