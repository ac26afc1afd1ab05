"""Shared fixtures for modplan tests."""

import pytest

from modplan import Directory
from modplan import config as config_module
from modplan.cli.commands import config_cmd


SAMPLE_MODULES = [
    ("CS2100", 4),
    ("GER1000", 4),
    ("CS2040S", 4),
    ("ST2131", 4),
    ("MA1521", 4),
    ("CS1231", 4),
    ("CS2030", 4),
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear MODPLAN_* env vars."""
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    for var in (
        "MODPLAN_BLOCKS_DIR",
        "MODPLAN_DIRECTORY",
        "MODPLAN_LOG_LEVEL",
        "MODPLAN_SHOW_INFOS",
    ):
        monkeypatch.delenv(var, raising=False)
    config_module.reset_config()
    yield config_file
    config_module.reset_config()


@pytest.fixture
def sample_modules():
    """Seven 4-MC modules, 28 MCs in total."""
    return list(SAMPLE_MODULES)


@pytest.fixture
def cs_directory():
    """A small degree with a core block, an elective block and a minor."""
    directory = Directory()
    directory.add_block(
        "cs",
        {
            "name": "Computer Science",
            "info": "Computer Science degree",
            "assign": ["core", "elective"],
            "satisfy": ["core", "elective", {"mc": ">=24"}],
            "core": {
                "match": ["CS1xxx*", "CS2040S"],
                "satisfy": {"mc": ">=8"},
                "info": "Core modules done",
            },
            "elective": {
                "match": {"and": ["CS*", {"exclude": "CS1xxx*"}]},
                "satisfy": {"mc": ">=8"},
            },
        },
    )
    directory.add_block(
        "math-minor",
        {
            "isSelectable": True,
            "match": {"or": ["MA*", "ST*"]},
            "satisfy": {"mc": ">=8"},
        },
    )
    return directory
