"""Block models and YAML I/O.

A Block is a named requirement node. Besides its reserved properties, an
authored block literal may carry any number of named child blocks as extra
keys; ``Block.from_raw`` moves those into ``subblocks``.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from ...errors import MalformedRuleTreeError
from .rules import MatchRule, SatisfyRule, parse_match_rule, parse_satisfy_rule

RESERVED_PROPERTIES = (
    "name",
    "ay",
    "assign",
    "match",
    "satisfy",
    "url",
    "info",
    "isSelectable",
)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else [value]


class Block(BaseModel):
    """A requirement node.

    ``assign``, ``match`` and ``satisfy`` accept either one value or a list
    when authored, and are always stored as lists. ``assign`` order is the
    assignment priority.
    """

    name: str | None = None
    ay: int | None = None
    assign: list[str] | None = None
    match: list[MatchRule] | None = None
    satisfy: list[SatisfyRule] | None = None
    url: str | None = None
    info: str | None = None
    is_selectable: bool = Field(default=False, alias="isSelectable")
    subblocks: dict[str, "Block"] = Field(default_factory=dict)

    @field_validator("assign", mode="before")
    @classmethod
    def coerce_assign(cls, v):
        if v is None:
            return None
        return _as_list(v)

    @field_validator("match", mode="before")
    @classmethod
    def coerce_match(cls, v):
        if v is None:
            return None
        return [parse_match_rule(rule) for rule in _as_list(v)]

    @field_validator("satisfy", mode="before")
    @classmethod
    def coerce_satisfy(cls, v):
        if v is None:
            return None
        return [parse_satisfy_rule(rule) for rule in _as_list(v)]

    @model_validator(mode="before")
    @classmethod
    def collect_subblocks(cls, data: Any) -> Any:
        """Move every non-reserved key of an authored literal into ``subblocks``."""
        if not isinstance(data, dict):
            return data

        props: dict[str, Any] = {}
        subblocks: dict[str, Any] = {}
        for key, value in data.items():
            key = str(key)
            if key in RESERVED_PROPERTIES:
                props[key] = value
            elif value is None:
                subblocks[key] = {}
            elif isinstance(value, (dict, Block)):
                subblocks[key] = value
            else:
                raise MalformedRuleTreeError("block", value)
        return {**props, "subblocks": subblocks}

    @classmethod
    def from_raw(cls, data: Any) -> "Block":
        """Build a Block from an authored literal.

        Keys in RESERVED_PROPERTIES become block properties; every other key
        is a nested sub-block definition. An empty (``None``) literal is an
        empty block.
        """
        if data is None:
            return cls()
        if isinstance(data, Block):
            return data
        if not isinstance(data, dict):
            raise MalformedRuleTreeError("block", data)
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Block":
        """Load a block from a YAML file."""
        path = Path(path)

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_raw(data)

    def flatten(self) -> "Block":
        """Return this block with its sub-blocks stripped out."""
        return self.model_copy(update={"subblocks": {}})

    def decompose(self) -> tuple["Block", dict[str, "Block"]]:
        """Split into the flattened block and its descendants.

        Descendant identifiers are relative to this block and joined by '/',
        e.g. ``{"core": ..., "core/ue": ...}``.
        """
        flat: dict[str, Block] = {}
        for name, sub in self.subblocks.items():
            sub_main, sub_flat = sub.decompose()
            flat[name] = sub_main
            for rel_id, block in sub_flat.items():
                flat[f"{name}/{rel_id}"] = block
        return self.flatten(), flat

    def label(self, block_id: str) -> str:
        """Display label: the block name if set, else its identifier."""
        return self.name or block_id


Block.model_rebuild()
