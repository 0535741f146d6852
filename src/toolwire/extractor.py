"""
Structured data extraction: ask a model to call a `submit` tool whose
parameters are the JSON schema of a pydantic model.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .agent.builder import AgentBuilder
from .agent.core import Agent
from .completion import ToolDefinition
from .exceptions import ExtractionError
from .providers.base import CompletionModel

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

SUBMIT_TOOL_NAME = "submit"

EXTRACTOR_PREAMBLE = (
    "You are an AI assistant whose purpose is to extract structured data from the provided text.\n"
    f"You have access to a `{SUBMIT_TOOL_NAME}` function that defines the structure of the data "
    "to extract from the provided text.\n"
    f"Use the `{SUBMIT_TOOL_NAME}` function to submit the structured data.\n"
    f"Fill out every field and ALWAYS call the `{SUBMIT_TOOL_NAME}` function, "
    "even with default values."
)


class SubmitTool:
    """The `submit` tool; its arguments are the extracted object."""

    name = SUBMIT_TOOL_NAME

    def __init__(self, target: Type[BaseModel]):
        self.target = target

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description="Submit the structured data you extracted from the provided text.",
            parameters=self.target.model_json_schema(),
        )

    async def call(self, arguments: Dict[str, Any]) -> str:
        return json.dumps(arguments)


class Extractor(Generic[T]):
    """
    Extracts an instance of `target` from free text.

    Example:
        >>> class Person(BaseModel):
        ...     name: str
        ...     age: int
        >>> extractor = client.extractor(cohere.COMMAND_R, Person).build()
        >>> await extractor.extract("Ada is 36 years old.")
        Person(name='Ada', age=36)
    """

    def __init__(self, agent: Agent, target: Type[T]):
        self.agent = agent
        self.target = target

    async def extract(self, text: str) -> T:
        """
        Raises:
            ExtractionError: If the model did not call `submit` or its
                arguments do not validate against the target model.
        """
        response = await self.agent.completion(text)
        for call in response.tool_calls:
            if call.name != SUBMIT_TOOL_NAME:
                continue
            try:
                return self.target.model_validate(call.arguments)
            except ValidationError as exc:
                raise ExtractionError(
                    f"Submitted data does not match {self.target.__name__}: {exc}"
                ) from exc

        logger.debug(f"Extractor response without a submit call: {response.choice!r}")
        raise ExtractionError(f"No data extracted: the model did not call `{SUBMIT_TOOL_NAME}`")


class ExtractorBuilder(Generic[T]):
    """Builds an Extractor; extra preamble lines and context are passed to its agent."""

    def __init__(self, model: CompletionModel, target: Type[T]):
        self.target = target
        self._agent = AgentBuilder(model).preamble(EXTRACTOR_PREAMBLE).tool(SubmitTool(target))

    def preamble(self, text: str) -> "ExtractorBuilder[T]":
        """Append instructions after the built-in extraction preamble."""
        self._agent.append_preamble(text)
        return self

    def context(self, text: str) -> "ExtractorBuilder[T]":
        self._agent.context(text)
        return self

    def additional_params(self, params: Optional[Dict[str, Any]]) -> "ExtractorBuilder[T]":
        if params:
            self._agent.additional_params(params)
        return self

    def build(self) -> Extractor[T]:
        return Extractor(self._agent.build(), self.target)


__all__ = ["Extractor", "ExtractorBuilder", "SubmitTool", "EXTRACTOR_PREAMBLE", "SUBMIT_TOOL_NAME"]
