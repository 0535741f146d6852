"""
Tests for the recursive merge applied to additional_params.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from toolwire.json_utils import as_count, drop_none, merge

json_scalars = st.none() | st.booleans() | st.integers() | st.text(max_size=5)
json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(max_size=4), children, max_size=3),
    max_leaves=10,
)
json_objects = st.dictionaries(st.text(max_size=4), json_values, max_size=4)


class TestMerge:
    def test_scalar_override(self) -> None:
        assert merge({"temperature": 0.5}, {"temperature": 0.9}) == {"temperature": 0.9}

    def test_nested_objects_merge(self) -> None:
        base = {"model": "m", "options": {"a": 1, "b": 2}}
        merged = merge(base, {"options": {"b": 3, "c": 4}})
        assert merged == {"model": "m", "options": {"a": 1, "b": 3, "c": 4}}

    def test_arrays_replace(self) -> None:
        assert merge({"stop": ["a", "b"]}, {"stop": ["c"]}) == {"stop": ["c"]}

    def test_object_replaces_scalar(self) -> None:
        assert merge({"x": 1}, {"x": {"y": 2}}) == {"x": {"y": 2}}

    def test_inputs_are_not_mutated(self) -> None:
        base = {"options": {"a": 1}}
        overrides = {"options": {"b": 2}}
        merge(base, overrides)
        assert base == {"options": {"a": 1}}
        assert overrides == {"options": {"b": 2}}

    @given(json_objects)
    def test_merge_with_empty_is_identity(self, obj) -> None:
        assert merge(obj, {}) == obj

    @given(json_objects, json_objects)
    def test_override_keys_always_present(self, base, overrides) -> None:
        merged = merge(base, overrides)
        for key, value in overrides.items():
            if not isinstance(value, dict):
                assert merged[key] == value


class TestDropNone:
    def test_drops_top_level_none(self) -> None:
        assert drop_none({"a": None, "b": 0, "c": {"d": None}}) == {"b": 0, "c": {"d": None}}


class TestAsCount:
    @pytest.mark.parametrize(
        "value, expected",
        [(12, 12), (3.0, 3), ("40", 40), (None, 0), ("n/a", 0), (True, 0), ({"x": 1}, 0), (float("nan"), 0)],
    )
    def test_values(self, value, expected) -> None:
        assert as_count(value) == expected
