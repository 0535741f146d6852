"""
Agent built over a completion model, with tools and static context.
"""

from .builder import AgentBuilder
from .config import AgentConfig
from .core import Agent

__all__ = ["Agent", "AgentBuilder", "AgentConfig"]
