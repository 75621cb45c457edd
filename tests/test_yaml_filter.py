"""Tests for text-level root key filtering."""

import pytest

from configutils.config import filter_root_keys, yaml_keep_root_keys, yaml_remove_root_keys

DOCUMENT = b"""
key1:
  key11: 11

key2: true

key3:
  key31: 31

key4:
  key41: 41
"""


class TestYAMLRemoveRootKeys:
    """Tests for yaml_remove_root_keys."""

    def test_removes_keys_and_keeps_lines(self):
        result = yaml_remove_root_keys(DOCUMENT, "key2", "key3", "key3x")

        assert result == b"""
key1:
  key11: 11






key4:
  key41: 41
"""

    def test_no_keys_is_identity(self):
        assert yaml_remove_root_keys(DOCUMENT) == DOCUMENT

    def test_key_must_match_whole_name(self):
        data = b"key: 1\nkey1: 2\n"
        assert yaml_remove_root_keys(data, "key") == b"\nkey1: 2\n"

    def test_indented_keys_are_not_roots(self):
        data = b"outer:\n  key2: nested\nkey2: root\n"
        assert yaml_remove_root_keys(data, "key2") == b"outer:\n  key2: nested\n\n"

    def test_flush_left_sequence_ends_section(self):
        # A sequence at column zero reads as a new root entry
        data = b"key1: 1\nkey2:\n- a\n- b\n"
        assert yaml_remove_root_keys(data, "key2") == b"key1: 1\n\n- a\n- b\n"


class TestYAMLKeepRootKeys:
    """Tests for yaml_keep_root_keys."""

    def test_keeps_keys_and_keeps_lines(self):
        result = yaml_keep_root_keys(DOCUMENT, "key2", "key3", "key3x")

        assert result == b"""



key2: true

key3:
  key31: 31



"""

    def test_no_keys_blanks_everything(self):
        result = yaml_keep_root_keys(DOCUMENT)
        assert result == b"\n" * DOCUMENT.count(b"\n")


class TestFilterProperties:
    """Properties shared by both filter modes."""

    @pytest.mark.parametrize("keys", [(), ("key1",), ("key2", "key4"), ("missing",)])
    @pytest.mark.parametrize("keep", [False, True])
    def test_line_count_preserved(self, keys, keep):
        result = filter_root_keys(DOCUMENT, keys, keep)
        assert result.count(b"\n") == DOCUMENT.count(b"\n")

    @pytest.mark.parametrize("keys", [("key1",), ("key2", "key3"), ("key4", "missing")])
    def test_modes_are_complementary(self, keys):
        removed = yaml_remove_root_keys(DOCUMENT, *keys).split(b"\n")
        kept = yaml_keep_root_keys(DOCUMENT, *keys).split(b"\n")

        for original, r, k in zip(DOCUMENT.split(b"\n"), removed, kept):
            if original.strip():
                # Every non-blank line survives in exactly one mode
                assert (r == original) != (k == original)
                assert b"" in (r, k)
