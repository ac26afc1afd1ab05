"""Tests for Directory registration and identifier resolution."""

import pytest

from modplan import Block, Directory
from modplan.directory import join_id
from modplan.errors import BlockNotFoundError, DuplicateIdentifierError


class TestAddBlock:
    """Tests for Directory.add_block."""

    def test_nested_blocks_are_flattened(self):
        directory = Directory()
        directory.add_block("cs", {"name": "CS", "core": {"ue": {}}})

        assert set(directory) == {"cs", "cs/core", "cs/core/ue"}
        assert directory.blocks["cs"].name == "CS"
        assert directory.blocks["cs"].subblocks == {}
        assert directory.blocks["cs/core"].subblocks == {}

    def test_accepts_block_instances(self):
        directory = Directory()
        directory.add_block("cs", Block(name="CS"))
        assert "cs" in directory

    def test_none_literal_is_empty_block(self):
        directory = Directory()
        directory.add_block("empty", None)
        assert directory.blocks["empty"] == Block()

    def test_duplicate_identifier_raises(self):
        directory = Directory()
        directory.add_block("cs", {})
        with pytest.raises(DuplicateIdentifierError, match="'cs' already exists"):
            directory.add_block("cs", {})

    def test_registration_is_all_or_nothing(self):
        """A collision on a sub-block leaves the directory untouched."""
        directory = Directory()
        directory.add_block("cs/core", {})

        with pytest.raises(DuplicateIdentifierError) as exc_info:
            directory.add_block("cs", {"core": {}, "elective": {}})

        assert exc_info.value.block_id == "cs/core"
        assert "cs" not in directory
        assert "cs/elective" not in directory
        assert len(directory) == 1

    def test_blocks_view_is_read_only(self):
        directory = Directory()
        directory.add_block("cs", {})
        with pytest.raises(TypeError):
            directory.blocks["other"] = Block()


class TestFind:
    """Tests for Directory.find resolution rules."""

    def test_exact_match_wins_over_prefixed(self):
        directory = Directory()
        directory.add_block("abc", {"ghi": {"name": "nested"}})
        directory.add_block("ghi", {"name": "bare"})

        full_id, block = directory.find("abc", "ghi")

        assert full_id == "ghi"
        assert block.name == "bare"

    def test_falls_back_to_prefixed_identifier(self):
        directory = Directory()
        directory.add_block("abc", {"ghi": {"name": "nested"}})

        full_id, block = directory.find("abc", "ghi")

        assert full_id == "abc/ghi"
        assert block.name == "nested"

    def test_missing_block_lists_candidates(self):
        directory = Directory()
        directory.add_block("abc", {})

        with pytest.raises(BlockNotFoundError) as exc_info:
            directory.find("abc", "nope")

        assert exc_info.value.candidates == ["nope", "abc/nope"]
        assert "'nope' does not exist" in str(exc_info.value)

    def test_missing_block_without_prefix(self):
        with pytest.raises(BlockNotFoundError) as exc_info:
            Directory().find("", "nope")
        assert exc_info.value.candidates == ["nope"]

    def test_resolution_is_order_independent(self):
        """Registering disjoint blocks in either order resolves identically."""
        a = ("abc", {"ghi": {"name": "nested"}, "jkl": {}})
        b = ("ghi", {"name": "bare"})

        forward = Directory()
        forward.add_block(*a)
        forward.add_block(*b)
        backward = Directory()
        backward.add_block(*b)
        backward.add_block(*a)

        for prefix, block_id in [("abc", "ghi"), ("abc", "jkl"), ("", "abc/ghi")]:
            assert forward.find(prefix, block_id) == backward.find(prefix, block_id)


class TestSelectable:
    """Tests for Directory.retrieve_selectable."""

    def test_only_flagged_blocks_are_listed(self):
        directory = Directory()
        directory.add_block(
            "minor",
            {"isSelectable": True, "a": {"isSelectable": True}, "b": {}},
        )
        directory.add_block("degree", {})

        assert directory.retrieve_selectable() == ["minor", "minor/a"]

    def test_fixture_minor_is_selectable(self, cs_directory):
        assert cs_directory.retrieve_selectable() == ["math-minor"]


def test_join_id():
    assert join_id("", "cs") == "cs"
    assert join_id("cs", "core") == "cs/core"
