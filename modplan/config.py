"""Configuration management for modplan.

Config resolution order (highest priority first):
1. Programmatic (ModplanConfig constructed in code)
2. Environment variables (MODPLAN_BLOCKS_DIR, MODPLAN_DIRECTORY, ...)
3. Config file (~/.config/modplan/config.json, managed by `modplan config`)
4. Hardcoded defaults
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any


logger = logging.getLogger(__name__)


# =============================================================================
# Config file location
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "modplan"
CONFIG_FILE = CONFIG_DIR / "config.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    """Parse a boolean config value.

    Raises:
        ValueError: If the value is not a recognised boolean literal.
    """
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean: {value!r}")


# =============================================================================
# Main config class
# =============================================================================


@dataclass
class ModplanConfig:
    """Top-level modplan configuration.

    - blocks_dir: folder of block YAML files, one sub-folder per Directory
    - directory: sub-folder used when a command does not name one
    - log_level: CLI logging level
    - show_infos: show block info text for satisfied requirements
    """

    blocks_dir: str = "./blocks"
    directory: str = "primary"
    log_level: str = "WARNING"
    show_infos: bool = True

    @classmethod
    def load(cls) -> "ModplanConfig":
        """Load config from file + env vars.

        Priority: env var values > config.json values > defaults.
        """
        config = cls()

        # Layer 1: Load from config file if it exists
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE) as f:
                    data = json.load(f)
                _apply_dict(config, data)
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Failed to load config from %s: %s", CONFIG_FILE, exc)

        # Layer 2: Env var overrides
        if val := os.environ.get("MODPLAN_BLOCKS_DIR"):
            config.blocks_dir = val
        if val := os.environ.get("MODPLAN_DIRECTORY"):
            config.directory = val
        if val := os.environ.get("MODPLAN_LOG_LEVEL"):
            if val.upper() in LOG_LEVELS:
                config.log_level = val.upper()
            else:
                logger.warning("Invalid MODPLAN_LOG_LEVEL=%r, ignoring", val)
        if val := os.environ.get("MODPLAN_SHOW_INFOS"):
            try:
                config.show_infos = parse_bool(val)
            except ValueError:
                logger.warning("Invalid MODPLAN_SHOW_INFOS=%r, ignoring", val)

        return config

    def save(self) -> None:
        """Save config to ~/.config/modplan/config.json."""
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w") as f:
            json.dump(asdict(self), f, indent=2)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        return asdict(self)

    @property
    def blocks_path(self) -> Path:
        return Path(self.blocks_dir)

    @property
    def directory_path(self) -> Path:
        """Folder holding the default Directory's block files."""
        return self.blocks_path / self.directory


# =============================================================================
# Config dict application
# =============================================================================


def _apply_dict(config: ModplanConfig, data: dict) -> None:
    """Apply a dict of values onto a ModplanConfig, skipping invalid entries."""
    known = {f.name for f in fields(config)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Unknown config key %r, ignoring", key)
            continue
        if key == "log_level":
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                logger.warning("Invalid log_level=%r in config, ignoring", value)
                continue
            value = value.upper()
        elif key == "show_infos":
            if isinstance(value, str):
                try:
                    value = parse_bool(value)
                except ValueError:
                    logger.warning("Invalid show_infos=%r in config, ignoring", value)
                    continue
            value = bool(value)
        else:
            value = str(value)
        setattr(config, key, value)


# =============================================================================
# Global config singleton
# =============================================================================

_config: ModplanConfig | None = None


def get_config() -> ModplanConfig:
    """Get the global ModplanConfig instance.

    First call loads from file + env vars. Subsequent calls return cached instance.
    Use configure() to replace the global config programmatically.
    """
    global _config
    if _config is None:
        _config = ModplanConfig.load()
    return _config


def configure(config: ModplanConfig) -> None:
    """Set the global ModplanConfig programmatically.

    Use this when modplan is used as a package:
        from modplan.config import configure, ModplanConfig
        configure(ModplanConfig(blocks_dir="./requirements"))
    """
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global config (forces reload on next get_config())."""
    global _config
    _config = None
