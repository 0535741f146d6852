"""
MCP tools: offer every tool listed by a tool server to an agent.

Any MCP client session exposing `list_tools()` and `call_tool(name, arguments)`
works; this example uses a tiny in-process server so it runs without one.

Prerequisites: HYPERBOLIC_API_KEY
    pip install toolwire

Run:
    python examples/03_mcp_tools_agent.py
"""

import asyncio
from typing import Any, Dict, List

from toolwire import ToolDefinition
from toolwire.providers import hyperbolic


class NotesServer:
    """In-process stand-in for an MCP server with a single `save_note` tool."""

    def __init__(self) -> None:
        self.notes: List[str] = []

    async def list_tools(self) -> List[ToolDefinition]:
        return [
            ToolDefinition(
                name="save_note",
                description="Save a short note for the user",
                parameters={
                    "type": "object",
                    "properties": {"text": {"type": "string", "description": "The note text"}},
                    "required": ["text"],
                },
            )
        ]

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> Any:
        self.notes.append(arguments["text"])
        return {"saved": True, "count": len(self.notes)}


async def main() -> None:
    server = NotesServer()
    client = hyperbolic.Client.from_env()

    builder = client.agent(hyperbolic.LLAMA_3_3_70B).preamble(
        "You help the user keep notes. Use the tools you are given."
    )
    for definition in await server.list_tools():
        builder = builder.mcp_tool(definition, server)
    agent = builder.build()

    print(await agent.prompt("Save a note saying 'buy milk'"))
    print(f"Notes on server: {server.notes}")

    await client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
