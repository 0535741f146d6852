"""
Local tools: a Python callable plus the metadata a model needs to call it.
"""

from __future__ import annotations

import asyncio
import contextvars
import difflib
import functools
import inspect
import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from ..completion import JsonSchema, ToolDefinition
from ..exceptions import ToolExecutionError, ToolValidationError

ParamMetadata = Dict[str, Any]

_JSON_TYPES = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    list: "array",
    dict: "object",
}


@runtime_checkable
class CallableTool(Protocol):
    """Anything the agent can offer to a model and run: local or MCP-backed."""

    name: str

    def definition(self) -> ToolDefinition:
        ...

    async def call(self, arguments: Dict[str, Any]) -> str:
        ...


@dataclass
class ToolParameter:
    """
    Schema definition for a single tool parameter.

    Attributes:
        name: Parameter name (must match the function parameter name).
        param_type: Python type (str, int, float, bool, list, dict).
        description: Human-readable description shown to the model.
        required: Whether this parameter must be provided (default: True).
        enum: Optional list of allowed string values.
    """

    name: str
    param_type: type
    description: str
    required: bool = True
    enum: Optional[List[str]] = None

    def to_schema(self) -> JsonSchema:
        schema: JsonSchema = {
            "type": _JSON_TYPES.get(self.param_type, "string"),
            "description": self.description,
        }
        if self.enum:
            schema["enum"] = self.enum
        return schema


def _stringify(result: Any) -> str:
    if isinstance(result, str):
        return result
    try:
        return json.dumps(result)
    except (TypeError, ValueError):
        return str(result)


class Tool:
    """
    A Python function exposed to models as a tool.

    Sync functions run in a worker thread so `call()` never blocks the event
    loop; async functions are awaited directly.

    Attributes:
        name: Unique identifier for the tool.
        description: What the tool does (shown to the model).
        parameters: ToolParameter list defining the expected arguments.
        function: The underlying callable.
        injected_kwargs: Extra kwargs passed at call time, hidden from the model.
    """

    def __init__(
        self,
        name: str,
        description: str,
        parameters: List[ToolParameter],
        function: Callable[..., Any],
        *,
        injected_kwargs: Optional[Dict[str, Any]] = None,
    ):
        self.name = name
        self.description = description
        self.parameters = parameters
        self.function = function
        self.injected_kwargs = injected_kwargs or {}
        self.is_async = inspect.iscoroutinefunction(function)

        self._validate_tool_definition()

    def _validate_tool_definition(self) -> None:
        """
        Catch definition mistakes at construction time.

        Raises:
            ToolValidationError: On an empty name/description, duplicate or
                unsupported parameters, or parameters missing from the signature.
        """
        if not self.name or not self.name.strip():
            raise ToolValidationError(
                tool_name="<unnamed>",
                param_name="name",
                issue="Tool name cannot be empty",
                suggestion="Provide a descriptive name for the tool",
            )

        if not self.description or not self.description.strip():
            raise ToolValidationError(
                tool_name=self.name,
                param_name="description",
                issue="Tool description cannot be empty",
                suggestion="Describe what the tool does; models choose tools by description",
            )

        names = [p.name for p in self.parameters]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ToolValidationError(
                tool_name=self.name,
                param_name=", ".join(duplicates),
                issue="Duplicate parameter name(s)",
                suggestion="Each parameter must have a unique name",
            )

        for param in self.parameters:
            if param.param_type not in _JSON_TYPES:
                type_list = ", ".join(t.__name__ for t in _JSON_TYPES)
                raise ToolValidationError(
                    tool_name=self.name,
                    param_name=param.name,
                    issue=f"Unsupported parameter type: {param.param_type}",
                    suggestion=f"Use one of: {type_list}",
                )

        try:
            func_params = inspect.signature(self.function).parameters
        except (ValueError, TypeError):
            return

        accepts_kwargs = any(p.kind == inspect.Parameter.VAR_KEYWORD for p in func_params.values())
        for param in self.parameters:
            if param.name not in func_params and not accepts_kwargs:
                raise ToolValidationError(
                    tool_name=self.name,
                    param_name=param.name,
                    issue=f"Parameter '{param.name}' not found in function signature",
                    suggestion=f"Available function parameters: {', '.join(func_params) or 'none'}",
                )

    def definition(self) -> ToolDefinition:
        """The provider-agnostic ToolDefinition for this tool."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters={
                "type": "object",
                "properties": {p.name: p.to_schema() for p in self.parameters},
                "required": [p.name for p in self.parameters if p.required],
            },
        )

    def validate(self, arguments: Dict[str, Any]) -> None:
        """
        Check model-supplied arguments against the parameter list.

        Raises:
            ToolValidationError: On unknown, missing or mistyped arguments.
        """
        expected = {p.name for p in self.parameters}
        extra = set(arguments) - expected
        if extra:
            hints = []
            for name in sorted(extra):
                matches = difflib.get_close_matches(name, expected, n=1, cutoff=0.6)
                hints.append(
                    f"'{name}' -> Did you mean '{matches[0]}'?" if matches else f"'{name}' is not a valid parameter"
                )
            raise ToolValidationError(
                tool_name=self.name,
                param_name=", ".join(sorted(extra)),
                issue="Unexpected parameter(s)",
                suggestion="; ".join(hints),
            )

        for param in self.parameters:
            if param.name not in arguments:
                if param.required:
                    raise ToolValidationError(
                        tool_name=self.name,
                        param_name=param.name,
                        issue="Missing required parameter",
                    )
                continue

            value = arguments[param.name]
            if param.param_type is float:
                ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            elif param.param_type is int:
                ok = isinstance(value, int) and not isinstance(value, bool)
            else:
                ok = isinstance(value, param.param_type)
            if not ok:
                raise ToolValidationError(
                    tool_name=self.name,
                    param_name=param.name,
                    issue=f"Expected {param.param_type.__name__}, got {type(value).__name__}",
                )

    async def call(self, arguments: Dict[str, Any]) -> str:
        """Validate the arguments, run the function and return its output as text."""
        self.validate(arguments)
        call_args = dict(arguments)
        call_args.update(self.injected_kwargs)

        try:
            if self.is_async:
                result = await self.function(**call_args)
            else:
                loop = asyncio.get_running_loop()
                context = contextvars.copy_context()
                func = functools.partial(self.function, **call_args)
                result = await loop.run_in_executor(None, context.run, func)
        except Exception as exc:
            raise ToolExecutionError(tool_name=self.name, error=exc, arguments=arguments) from exc

        return _stringify(result)


__all__ = ["CallableTool", "ParamMetadata", "Tool", "ToolParameter"]
