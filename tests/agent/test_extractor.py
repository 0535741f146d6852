"""
Tests for the pydantic-backed Extractor.
"""

from __future__ import annotations

from typing import Optional

import pytest
from pydantic import BaseModel

from toolwire.completion import CompletionResponse
from toolwire.exceptions import ExtractionError
from toolwire.extractor import EXTRACTOR_PREAMBLE, Extractor, ExtractorBuilder
from toolwire.message import ToolCall
from toolwire.providers import cohere, hyperbolic


class Person(BaseModel):
    name: str
    age: int
    email: Optional[str] = None


class StubModel:
    provider = "stub"
    model = "stub-model"

    def __init__(self, response):
        self.response = response
        self.requests = []

    def complete(self, request):
        self.requests.append(request)
        return self.response

    async def acomplete(self, request):
        return self.complete(request)


def _submit(arguments):
    return CompletionResponse.from_parts(
        text="", tool_calls=[ToolCall(id="submit", name="submit", arguments=arguments)]
    )


class TestExtractor:
    @pytest.mark.asyncio
    async def test_extracts_submitted_data(self) -> None:
        model = StubModel(_submit({"name": "Ada", "age": 36}))
        extractor = ExtractorBuilder(model, Person).build()

        person = await extractor.extract("Ada is 36 years old.")

        assert person == Person(name="Ada", age=36)
        request = model.requests[0]
        assert request.preamble == EXTRACTOR_PREAMBLE
        assert request.prompt.text == "Ada is 36 years old."
        [submit] = request.tools
        assert submit.name == "submit"
        assert submit.parameters == Person.model_json_schema()

    @pytest.mark.asyncio
    async def test_invalid_data(self) -> None:
        extractor = ExtractorBuilder(StubModel(_submit({"name": "Ada", "age": "old"})), Person).build()
        with pytest.raises(ExtractionError, match="does not match Person"):
            await extractor.extract("Ada is old.")

    @pytest.mark.asyncio
    async def test_no_submit_call(self) -> None:
        response = CompletionResponse.from_parts(text="I could not find anyone.", tool_calls=[])
        extractor = ExtractorBuilder(StubModel(response), Person).build()
        with pytest.raises(ExtractionError, match="did not call `submit`"):
            await extractor.extract("nothing here")

    def test_builder_extra_preamble_and_context(self) -> None:
        model = StubModel(_submit({}))
        extractor = ExtractorBuilder(model, Person).preamble("Names are capitalised.").context("glossary").build()

        request = extractor.agent.build_request("x")

        assert request.preamble == f"{EXTRACTOR_PREAMBLE}\nNames are capitalised."
        assert [d.text for d in request.documents] == ["glossary"]

    def test_builder_calls_after_build_leave_extractor_unchanged(self) -> None:
        builder = ExtractorBuilder(StubModel(_submit({})), Person)
        extractor = builder.build()

        builder.preamble("Only adults.").context("later")

        request = extractor.agent.build_request("x")
        assert request.preamble == EXTRACTOR_PREAMBLE
        assert request.documents == []

    def test_provider_clients_build_extractors(self) -> None:
        assert isinstance(cohere.Client("k").extractor(cohere.COMMAND_R, Person), ExtractorBuilder)
        builder = hyperbolic.Client("k").extractor(hyperbolic.LLAMA_3_1_8B, Person)
        assert isinstance(builder.build(), Extractor)


class TestExtractorOverCohere:
    @pytest.mark.asyncio
    async def test_submit_schema_flattened_for_cohere(self, make_endpoint, cohere_chat_payload) -> None:
        endpoint = make_endpoint(
            cohere_chat_payload(text="", tool_calls=[{"name": "submit", "parameters": {"name": "Bo", "age": 7}}])
        )
        client = cohere.Client("k", transport=endpoint.transport)

        person = await client.extractor(cohere.COMMAND_R, Person).build().extract("Bo is seven.")

        assert person == Person(name="Bo", age=7)
        definitions = endpoint.body()["tools"][0]["parameter_definitions"]
        assert definitions["name"]["type"] == "string"
        assert definitions["age"] == {"description": "", "type": "integer", "required": True}
        assert definitions["email"]["required"] is False
