"""
Calculator agent: a Cohere model choosing between two local tools.

Prerequisites: COHERE_API_KEY (environment or a .env file in the working directory)
    pip install toolwire

Run:
    python examples/01_cohere_calculator_agent.py
"""

import asyncio
import logging

from toolwire import tool
from toolwire.providers import cohere


@tool(description="Add x and y together")
def add(x: int, y: int) -> int:
    return x + y


@tool(description="Subtract y from x (i.e.: x - y)")
def subtract(x: int, y: int) -> int:
    return x - y


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    client = cohere.Client.from_env()
    agent = (
        client.agent(cohere.COMMAND_R)
        .preamble("You are a calculator here to help the user perform arithmetic operations.")
        .tool(add)
        .tool(subtract)
        .build()
    )

    answer = await agent.prompt("Calculate 2 - 5")
    print(f"Answer: {answer}")
    print(agent.usage)

    await client.aclose()


if __name__ == "__main__":
    asyncio.run(main())
