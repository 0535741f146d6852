"""
Decorator that turns a typed function into a Tool.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, List, Optional, Union, get_args, get_origin, get_type_hints

from .base import ParamMetadata, Tool, ToolParameter


def _unwrap_optional(type_hint: Any) -> Any:
    """Unwrap Optional[T] to T."""
    if get_origin(type_hint) is Union:
        non_none = [a for a in get_args(type_hint) if a is not type(None)]
        if len(non_none) == 1:
            return _unwrap_optional(non_none[0])
    origin = get_origin(type_hint)
    if origin in (list, dict):
        return origin
    return type_hint


def _infer_parameters(
    func: Callable[..., Any],
    param_metadata: Optional[Dict[str, ParamMetadata]] = None,
    hidden: Optional[set] = None,
) -> List[ToolParameter]:
    """Build ToolParameters from a signature; defaults make a parameter optional."""
    type_hints = get_type_hints(func)
    param_metadata = param_metadata or {}
    hidden = hidden or set()
    parameters = []

    for name, param in inspect.signature(func).parameters.items():
        if name in ("self", "cls") or name in hidden:
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        meta = param_metadata.get(name, {})
        parameters.append(
            ToolParameter(
                name=name,
                param_type=_unwrap_optional(type_hints.get(name, str)),
                description=meta.get("description", f"Parameter {name}"),
                required=param.default is inspect.Parameter.empty,
                enum=meta.get("enum"),
            )
        )

    return parameters


def tool(
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    param_metadata: Optional[Dict[str, ParamMetadata]] = None,
    injected_kwargs: Optional[Dict[str, Any]] = None,
) -> Callable[[Callable[..., Any]], Tool]:
    """
    Convert a function into a Tool using its signature and type hints.

    Args:
        name: Tool name (defaults to the function name).
        description: Tool description (defaults to the docstring).
        param_metadata: Per-parameter overrides for description / enum.
        injected_kwargs: Kwargs passed at call time and hidden from the model.

    Example:
        >>> @tool(description="Add two integers")
        ... def add(x: int, y: int) -> int:
        ...     return x + y
        >>> add.definition().parameters["required"]
        ['x', 'y']
    """

    def decorator(func: Callable[..., Any]) -> Tool:
        tool_name = name or func.__name__
        return Tool(
            name=tool_name,
            description=description or inspect.getdoc(func) or f"Tool {tool_name}",
            parameters=_infer_parameters(func, param_metadata, set(injected_kwargs or {})),
            function=func,
            injected_kwargs=injected_kwargs,
        )

    return decorator


__all__ = ["tool"]
