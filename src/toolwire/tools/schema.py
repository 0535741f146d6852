"""
Conversion between JSON-schema tool parameters and flat per-argument maps.

Some providers (Cohere) declare tool parameters as a flat mapping of argument
name to `{type, description, required}` instead of a JSON-schema object. The
functions here are pure and deterministic so the same definition always
converts to the same map.

Type degradation is lossy on purpose: unknown type names become "string",
union types keep their first non-null member, and missing types become
"string".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..completion import JsonSchema, ToolDefinition
from ..exceptions import ConversionError

SUPPORTED_TYPES = ("string", "number", "integer", "boolean", "array", "object")
DEFAULT_TYPE = "string"


@dataclass(frozen=True)
class FlatParameter:
    """One argument in a flat parameter map."""

    type: str
    description: str
    required: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"description": self.description, "type": self.type, "required": self.required}


def degrade_type(type_value: Any) -> str:
    """
    Map a JSON-schema `type` value to a single primitive type name.

    Example:
        >>> degrade_type(["null", "integer"])
        'integer'
        >>> degrade_type("date-time")
        'string'
    """
    if isinstance(type_value, str):
        return type_value if type_value in SUPPORTED_TYPES else DEFAULT_TYPE
    if isinstance(type_value, (list, tuple)):
        for member in type_value:
            if isinstance(member, str) and member != "null":
                return degrade_type(member)
    return DEFAULT_TYPE


def flatten_parameters(
    definition: ToolDefinition, provider: str = ""
) -> Dict[str, FlatParameter]:
    """
    Flatten a tool's JSON-schema parameters into name -> FlatParameter.

    Raises:
        ConversionError: If `properties` is missing or not an object, or if
            `required` names an argument absent from `properties`.
    """
    schema = definition.parameters or {}
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        raise ConversionError(
            f"Tool '{definition.name}' parameters must define an object of 'properties'",
            provider=provider or None,
        )

    required_raw = schema.get("required") or []
    required = [name for name in required_raw if isinstance(name, str)]
    unknown = [name for name in required if name not in properties]
    if unknown:
        raise ConversionError(
            f"Tool '{definition.name}' requires undefined parameter(s): {', '.join(unknown)}",
            provider=provider or None,
        )

    flat: Dict[str, FlatParameter] = {}
    for arg_name, arg_schema in properties.items():
        arg_schema = arg_schema if isinstance(arg_schema, Mapping) else {}
        description = arg_schema.get("description")
        flat[arg_name] = FlatParameter(
            type=degrade_type(arg_schema.get("type")),
            description=description if isinstance(description, str) else "",
            required=arg_name in required,
        )
    return flat


def expand_parameters(flat: Mapping[str, FlatParameter]) -> JsonSchema:
    """Rebuild a JSON-schema object from a flat parameter map."""
    return {
        "type": "object",
        "properties": {
            name: {"type": param.type, "description": param.description}
            for name, param in flat.items()
        },
        "required": [name for name, param in flat.items() if param.required],
    }


__all__ = [
    "SUPPORTED_TYPES",
    "DEFAULT_TYPE",
    "FlatParameter",
    "degrade_type",
    "flatten_parameters",
    "expand_parameters",
]
