"""Tests for exclusive-option resolution (core/options.py)."""

from __future__ import annotations

import pytest

from vultr_cli.core.options import blank_to_none, resolve_exclusive
from vultr_cli.exceptions import AmbiguousOptionsError


class TestResolveExclusive:
    def test_single_option_is_selected(self) -> None:
        assert resolve_exclusive({"a": None, "b": "x", "c": None}) == "b"

    def test_nothing_set_returns_none(self) -> None:
        assert resolve_exclusive({"a": None, "b": None}) is None

    def test_empty_mapping_returns_none(self) -> None:
        assert resolve_exclusive({}) is None

    def test_zero_is_a_provided_value(self) -> None:
        # Presence is explicit: only None means "not provided".
        assert resolve_exclusive({"a": 0, "b": None}) == "a"

    def test_two_options_raise(self) -> None:
        with pytest.raises(AmbiguousOptionsError) as exc_info:
            resolve_exclusive({"a": "1", "b": "2", "c": None})
        assert exc_info.value.selected == ("a", "b")

    def test_error_lists_keys_in_mapping_order(self) -> None:
        with pytest.raises(AmbiguousOptionsError) as exc_info:
            resolve_exclusive({"snapshot_id": "s", "app_id": 1, "iso_id": "i"})
        assert exc_info.value.selected == ("snapshot_id", "app_id", "iso_id")
        assert "Too many options have been selected" in str(exc_info.value)


class TestBlankToNone:
    @pytest.mark.parametrize("value", [None, ""])
    def test_blank_values(self, value: str | None) -> None:
        assert blank_to_none(value) is None

    def test_non_blank_is_kept(self) -> None:
        assert blank_to_none("abc") == "abc"
