"""Match and satisfy rule models.

Both rule families are closed tagged unions keyed on ``kind``. Authored
rules (as decoded from YAML) use a terser shape without the tag; the
``parse_*`` functions convert that shape into the typed models:

Match rules:
    "MA2xxx*"                         -> PatternMatchRule
    {"pattern": "CS3xxx", "info": ..} -> PatternMatchRule
    {"and": [...]} / {"or": [...]}    -> AndMatchRule / OrMatchRule
    {"exclude": <rule>}               -> ExcludeMatchRule
    [<rule>, ...]                     -> OrMatchRule

Satisfy rules:
    "cs-core"                         -> BlockRefSatisfyRule
    {"mc": ">=24"}                    -> MCSatisfyRule
    {"and": [...]} / {"or": [...]}    -> AndSatisfyRule / OrSatisfyRule
    [<rule>, ...]                     -> AndSatisfyRule
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from ...errors import MalformedRuleTreeError


# =============================================================================
# Match rules
# =============================================================================


class PatternMatchRule(BaseModel):
    """Select modules whose code matches a wildcard pattern."""

    kind: Literal["pattern"] = "pattern"
    pattern: str
    info: str | None = None


class AndMatchRule(BaseModel):
    """Select modules selected by every child rule."""

    kind: Literal["and"] = "and"
    rules: list["MatchRule"]


class OrMatchRule(BaseModel):
    """Select modules selected by at least one child rule."""

    kind: Literal["or"] = "or"
    rules: list["MatchRule"]


class ExcludeMatchRule(BaseModel):
    """Remove modules selected by ``rule`` from the enclosing combinator."""

    kind: Literal["exclude"] = "exclude"
    rule: "MatchRule"


MatchRule = Annotated[
    Union[PatternMatchRule, AndMatchRule, OrMatchRule, ExcludeMatchRule],
    Field(discriminator="kind"),
]

AndMatchRule.model_rebuild()
OrMatchRule.model_rebuild()
ExcludeMatchRule.model_rebuild()

MATCH_RULE_TYPES = (PatternMatchRule, AndMatchRule, OrMatchRule, ExcludeMatchRule)

_match_rule_adapter: TypeAdapter = TypeAdapter(MatchRule)


def parse_match_rule(raw: Any) -> MatchRule:
    """Convert an authored match rule into its typed form.

    Raises:
        MalformedRuleTreeError: If ``raw`` matches none of the known shapes.
    """
    if isinstance(raw, MATCH_RULE_TYPES):
        return raw
    if isinstance(raw, str):
        return PatternMatchRule(pattern=raw)
    if isinstance(raw, list):
        return OrMatchRule(rules=[parse_match_rule(r) for r in raw])
    if not isinstance(raw, dict):
        raise MalformedRuleTreeError("match", raw)

    if "kind" in raw:
        return _match_rule_adapter.validate_python(raw)
    if "pattern" in raw and isinstance(raw["pattern"], str):
        return PatternMatchRule(pattern=raw["pattern"], info=raw.get("info"))
    if "and" in raw and isinstance(raw["and"], list):
        return AndMatchRule(rules=[parse_match_rule(r) for r in raw["and"]])
    if "or" in raw and isinstance(raw["or"], list):
        return OrMatchRule(rules=[parse_match_rule(r) for r in raw["or"]])
    if "exclude" in raw:
        return ExcludeMatchRule(rule=parse_match_rule(raw["exclude"]))
    raise MalformedRuleTreeError("match", raw)


# =============================================================================
# Satisfy rules
# =============================================================================


class BlockRefSatisfyRule(BaseModel):
    """The assigned modules must satisfy the referenced block."""

    kind: Literal["block"] = "block"
    block: str


class MCSatisfyRule(BaseModel):
    """Credit-count bound, e.g. ``">=24"`` or ``"<=16"``."""

    kind: Literal["mc"] = "mc"
    mc: str


class AndSatisfyRule(BaseModel):
    kind: Literal["and"] = "and"
    rules: list["SatisfyRule"]


class OrSatisfyRule(BaseModel):
    kind: Literal["or"] = "or"
    rules: list["SatisfyRule"]


SatisfyRule = Annotated[
    Union[BlockRefSatisfyRule, MCSatisfyRule, AndSatisfyRule, OrSatisfyRule],
    Field(discriminator="kind"),
]

AndSatisfyRule.model_rebuild()
OrSatisfyRule.model_rebuild()

SATISFY_RULE_TYPES = (BlockRefSatisfyRule, MCSatisfyRule, AndSatisfyRule, OrSatisfyRule)

_satisfy_rule_adapter: TypeAdapter = TypeAdapter(SatisfyRule)


def parse_satisfy_rule(raw: Any) -> SatisfyRule:
    """Convert an authored satisfy rule into its typed form.

    Raises:
        MalformedRuleTreeError: If ``raw`` matches none of the known shapes.
    """
    if isinstance(raw, SATISFY_RULE_TYPES):
        return raw
    if isinstance(raw, str):
        return BlockRefSatisfyRule(block=raw)
    if isinstance(raw, list):
        return AndSatisfyRule(rules=[parse_satisfy_rule(r) for r in raw])
    if not isinstance(raw, dict):
        raise MalformedRuleTreeError("satisfy", raw)

    if "kind" in raw:
        return _satisfy_rule_adapter.validate_python(raw)
    if "mc" in raw and isinstance(raw["mc"], str):
        return MCSatisfyRule(mc=raw["mc"])
    if "and" in raw and isinstance(raw["and"], list):
        return AndSatisfyRule(rules=[parse_satisfy_rule(r) for r in raw["and"]])
    if "or" in raw and isinstance(raw["or"], list):
        return OrSatisfyRule(rules=[parse_satisfy_rule(r) for r in raw["or"]])
    raise MalformedRuleTreeError("satisfy", raw)
