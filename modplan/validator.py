"""Authoring validation for block literals.

The engine assumes well-formed input. This module is the default validating
capability handed to the loader: it checks an authored (YAML-decoded) block
against the published rule shapes and reports every problem it finds, rather
than stopping at the first.
"""

import re
from typing import Any

from .core.models import (
    RESERVED_PROPERTIES,
    Block,
    Severity,
    ValidationIssue,
    ValidationResult,
)
from .errors import BlockNotFoundError, BlockValidationError

PATTERN_RE = re.compile(r"[A-Z0-9x*]+")
INEQUALITY_RE = re.compile(r"[<>]=[0-9]+")


# Helper functions to create ValidationIssue with appropriate severity
def ValidationError(
    category: str,
    location: str,
    message: str,
    suggestion: str | None = None,
) -> ValidationIssue:
    """Create an ERROR-level validation issue."""
    return ValidationIssue(
        severity=Severity.ERROR,
        category=category,
        location=location,
        message=message,
        suggestion=suggestion,
    )


def ValidationWarning(
    category: str,
    location: str,
    message: str,
    suggestion: str | None = None,
) -> ValidationIssue:
    """Create a WARNING-level validation issue."""
    return ValidationIssue(
        severity=Severity.WARNING,
        category=category,
        location=location,
        message=message,
        suggestion=suggestion,
    )


def _some(value: Any) -> list:
    return value if isinstance(value, list) else [value]


def _validate_pattern(pattern: Any, location: str) -> list[ValidationIssue]:
    if isinstance(pattern, str) and PATTERN_RE.fullmatch(pattern):
        return []
    return [
        ValidationError(
            category="pattern",
            location=location,
            message=f"pattern {pattern!r} should be a non-empty string composed of A-Z, 0-9, x or *",
            suggestion="Use 'x' for a single digit and '*' for any suffix, e.g. 'CS3xxx*'",
        )
    ]


def _validate_rule_list(
    value: Any, key: str, location: str, validate_rule
) -> list[ValidationIssue]:
    if not isinstance(value, list) or not value:
        return [
            ValidationError(
                category="rule_shape",
                location=location,
                message=f"property '{key}' should be a non-empty array of rules",
            )
        ]
    issues: list[ValidationIssue] = []
    for i, rule in enumerate(value):
        issues.extend(validate_rule(rule, f"{location}[{i}]"))
    return issues


def validate_match_rule(rule: Any, location: str = "match") -> list[ValidationIssue]:
    """Check one authored match rule."""
    if isinstance(rule, str):
        return _validate_pattern(rule, location)
    if not isinstance(rule, dict):
        return [
            ValidationError(
                category="rule_shape",
                location=location,
                message="match rule should be a pattern string or an object",
            )
        ]

    keys = set(rule)
    if "pattern" in keys:
        issues = _validate_pattern(rule["pattern"], f"{location}.pattern")
        extra = keys - {"pattern", "info"}
        if extra:
            issues.append(
                ValidationError(
                    category="rule_shape",
                    location=location,
                    message="pattern match rule should have properties 'pattern' and 'info' (optional) only",
                )
            )
        if "info" in rule and not isinstance(rule["info"], str):
            issues.append(
                ValidationError(
                    category="info",
                    location=f"{location}.info",
                    message="info message should be a string",
                )
            )
        return issues

    if len(keys) != 1 or not keys & {"and", "or", "exclude"}:
        return [
            ValidationError(
                category="rule_shape",
                location=location,
                message=f"match rule should have exactly one of 'pattern', 'and', 'or', 'exclude' (found: {', '.join(sorted(map(str, keys))) or 'none'})",
            )
        ]

    (key,) = keys
    if key == "exclude":
        return validate_match_rule(rule["exclude"], f"{location}.exclude")
    return _validate_rule_list(rule[key], key, f"{location}.{key}", validate_match_rule)


def validate_satisfy_rule(rule: Any, location: str = "satisfy") -> list[ValidationIssue]:
    """Check one authored satisfy rule."""
    if isinstance(rule, str):
        if rule:
            return []
        return [
            ValidationError(
                category="block_id",
                location=location,
                message="block reference should be a non-empty string",
            )
        ]
    if not isinstance(rule, dict):
        return [
            ValidationError(
                category="rule_shape",
                location=location,
                message="satisfy rule should be a block id or an object",
            )
        ]

    keys = set(rule)
    if len(keys) != 1 or not keys & {"and", "or", "mc"}:
        return [
            ValidationError(
                category="rule_shape",
                location=location,
                message=f"satisfy rule should have exactly one of 'mc', 'and', 'or' (found: {', '.join(sorted(map(str, keys))) or 'none'})",
            )
        ]

    (key,) = keys
    if key == "mc":
        mc = rule["mc"]
        if isinstance(mc, str) and INEQUALITY_RE.fullmatch(mc):
            return []
        return [
            ValidationError(
                category="inequality",
                location=f"{location}.mc",
                message="inequality should be a string in the form of '>=n' or '<=n' for some positive integer n",
                suggestion="e.g. mc: '>=24'",
            )
        ]
    return _validate_rule_list(rule[key], key, f"{location}.{key}", validate_satisfy_rule)


def validate_block(data: Any, location: str = "") -> ValidationResult:
    """Validate an authored block literal and all of its sub-blocks."""
    result = ValidationResult()
    where = location or "<root>"

    if data is None:
        return result
    if not isinstance(data, dict):
        result.issues.append(
            ValidationError(
                category="block",
                location=where,
                message=f"block should be an object, got {type(data).__name__}",
            )
        )
        return result

    def at(key: str) -> str:
        return f"{location}.{key}" if location else key

    for key, expected in (("name", str), ("url", str), ("info", str)):
        if key in data and data[key] is not None and not isinstance(data[key], expected):
            result.issues.append(
                ValidationError(
                    category="property_type",
                    location=at(key),
                    message=f"property '{key}' should be a string",
                )
            )
    if "ay" in data and data["ay"] is not None and (
        not isinstance(data["ay"], int) or isinstance(data["ay"], bool)
    ):
        result.issues.append(
            ValidationError(
                category="property_type",
                location=at("ay"),
                message="property 'ay' should be an integer academic year",
            )
        )
    if "isSelectable" in data and not isinstance(data["isSelectable"], bool):
        result.issues.append(
            ValidationError(
                category="property_type",
                location=at("isSelectable"),
                message="property 'isSelectable' should be a boolean",
            )
        )

    if data.get("assign") is not None:
        assign = _some(data["assign"])
        if not assign:
            result.issues.append(
                ValidationError(
                    category="rule_shape",
                    location=at("assign"),
                    message="property 'assign' should not be an empty array",
                )
            )
        for i, block_id in enumerate(assign):
            if not isinstance(block_id, str) or not block_id:
                result.issues.append(
                    ValidationError(
                        category="block_id",
                        location=f"{at('assign')}[{i}]",
                        message="assigned block id should be a non-empty string",
                    )
                )

    for key, validate_rule in (
        ("match", validate_match_rule),
        ("satisfy", validate_satisfy_rule),
    ):
        if data.get(key) is None:
            continue
        rules = data[key]
        if isinstance(rules, list):
            if not rules:
                result.issues.append(
                    ValidationError(
                        category="rule_shape",
                        location=at(key),
                        message=f"property '{key}' should not be an empty array",
                    )
                )
            for i, rule in enumerate(rules):
                result.issues.extend(validate_rule(rule, f"{at(key)}[{i}]"))
        else:
            result.issues.extend(validate_rule(rules, at(key)))

    for key, value in data.items():
        if str(key) in RESERVED_PROPERTIES:
            continue
        if not str(key):
            result.issues.append(
                ValidationError(
                    category="block_id",
                    location=where,
                    message="sub-block names should be non-empty",
                )
            )
            continue
        if "/" in str(key):
            result.issues.append(
                ValidationWarning(
                    category="block_id",
                    location=at(str(key)),
                    message=f"sub-block name '{key}' contains '/', which is the namespace separator",
                    suggestion="Nest the block instead of writing its path",
                )
            )
        result.extend(validate_block(value, at(str(key))))

    return result


def parse_block(data: Any, source: str | None = None) -> Block:
    """Validate an authored block literal and build a Block.

    This is the default validating capability used by the loader.

    Raises:
        BlockValidationError: If validation reports any errors.
    """
    result = validate_block(data)
    if not result.valid:
        raise BlockValidationError(result.errors, source=source)
    return Block.from_raw(data)


def validate_references(directory) -> ValidationResult:
    """Check that every assign/satisfy block reference in a Directory resolves."""
    result = ValidationResult()

    def refs_in(rule) -> list[str]:
        if rule.kind == "block":
            return [rule.block]
        if rule.kind in ("and", "or"):
            return [ref for child in rule.rules for ref in refs_in(child)]
        return []

    for block_id, block in directory.blocks.items():
        references = [("assign", ref) for ref in block.assign or []]
        for rule in block.satisfy or []:
            references.extend(("satisfy", ref) for ref in refs_in(rule))
        for key, ref in references:
            try:
                directory.find(block_id, ref)
            except BlockNotFoundError as e:
                result.issues.append(
                    ValidationError(
                        category="block_reference",
                        location=f"{block_id}.{key}",
                        message=str(e),
                        suggestion="Use a fully-qualified id or one relative to this block",
                    )
                )
        if block.assign is None and block.match is None and block.satisfy is None:
            if not any(other.startswith(f"{block_id}/") for other in directory.blocks):
                result.issues.append(
                    ValidationWarning(
                        category="empty_block",
                        location=block_id,
                        message="block has no assign, match or satisfy rules and is always satisfied",
                    )
                )

    return result
