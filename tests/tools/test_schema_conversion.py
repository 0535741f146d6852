"""
Property and unit tests for flat tool-parameter conversion.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from toolwire.completion import ToolDefinition
from toolwire.exceptions import ConversionError
from toolwire.tools.schema import (
    DEFAULT_TYPE,
    SUPPORTED_TYPES,
    FlatParameter,
    degrade_type,
    expand_parameters,
    flatten_parameters,
)

arg_names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=12)
arg_specs = st.fixed_dictionaries(
    {"type": st.sampled_from(SUPPORTED_TYPES), "description": st.text(max_size=30)}
)


@st.composite
def tool_definitions(draw):
    properties = draw(st.dictionaries(arg_names, arg_specs, max_size=6))
    required = [name for name in properties if draw(st.booleans())]
    return ToolDefinition(
        name=draw(arg_names),
        description=draw(st.text(max_size=40)),
        parameters={"type": "object", "properties": properties, "required": required},
    )


class TestRoundTrip:
    @given(tool_definitions())
    def test_flatten_then_expand_preserves_schema(self, definition) -> None:
        assert expand_parameters(flatten_parameters(definition)) == definition.parameters

    @given(tool_definitions())
    def test_required_flags_match_required_list(self, definition) -> None:
        flat = flatten_parameters(definition)
        required = set(definition.parameters["required"])
        assert {name for name, param in flat.items() if param.required} == required


class TestDegradeType:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("integer", "integer"),
            (["null", "integer"], "integer"),
            (["string", "number"], "string"),
            (["null"], DEFAULT_TYPE),
            ("null", DEFAULT_TYPE),
            (None, DEFAULT_TYPE),
            ({"$ref": "#/defs/x"}, DEFAULT_TYPE),
        ],
    )
    def test_degradation(self, value, expected) -> None:
        assert degrade_type(value) == expected


class TestFlattenEdgeCases:
    def test_missing_description_becomes_empty(self) -> None:
        definition = ToolDefinition(
            name="t", description="d", parameters={"type": "object", "properties": {"x": {"type": "number"}}}
        )
        assert flatten_parameters(definition) == {
            "x": FlatParameter(type="number", description="", required=False)
        }

    def test_missing_type_defaults_to_string(self) -> None:
        definition = ToolDefinition(
            name="t", description="d", parameters={"properties": {"x": {"description": "no type"}}}
        )
        assert flatten_parameters(definition)["x"].type == "string"

    def test_properties_not_an_object(self) -> None:
        definition = ToolDefinition(name="t", description="d", parameters={"properties": ["x"]})
        with pytest.raises(ConversionError):
            flatten_parameters(definition, provider="cohere")

    def test_required_names_unknown_argument(self) -> None:
        definition = ToolDefinition(
            name="t",
            description="d",
            parameters={"properties": {"x": {"type": "string"}}, "required": ["x", "y"]},
        )
        with pytest.raises(ConversionError, match="undefined parameter"):
            flatten_parameters(definition)

    def test_flat_parameter_wire_dict(self) -> None:
        assert FlatParameter(type="string", description="d", required=True).to_dict() == {
            "description": "d",
            "type": "string",
            "required": True,
        }
