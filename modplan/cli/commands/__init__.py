"""CLI commands for modplan."""

from . import (
    check,
    blocks,
    validate,
    config_cmd,
)

__all__ = [
    "check",
    "blocks",
    "validate",
    "config_cmd",
]
