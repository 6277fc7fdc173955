"""
Agent role configuration shared by every research role.

A role is a prompt, an optional structured output model and a tool flag,
dispatched through one generic invocation function rather than a class per
agent type.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from strands import Agent
from strands.models.model import Model
from strands.types.content import ContentBlock

OutputT = TypeVar("OutputT")


@dataclass(frozen=True)
class AgentRole(Generic[OutputT]):
    """Configuration of one research role."""

    name: str
    system_prompt: Callable[[], str]
    output_model: type[OutputT] | None = None
    uses_tools: bool = False
    prompt_template: str = "{text}"

    def render_prompt(self, text: str) -> str:
        return self.prompt_template.format(text=text)


def extract_content_text(c: ContentBlock) -> str:
    """Extract text content from a content block, handling reasoning content."""
    if "text" in c:
        return c["text"]
    elif "reasoningContent" in c:
        reasoning = c["reasoningContent"]
        if "reasoningText" in reasoning and "text" in reasoning["reasoningText"]:
            return reasoning["reasoningText"]["text"]
    return ""


def build_agent(role: AgentRole, model: Model, tools: list | None = None) -> Agent:
    """
    Create a fresh Strands agent for a single invocation of a role.

    Args:
        role: Role whose system prompt the agent uses
        model: Model instance backing the agent
        tools: Tools offered to the agent, if the role uses any

    Returns:
        Agent with an empty conversation history
    """
    return Agent(
        model=model,
        name=role.name,
        system_prompt=role.system_prompt(),
        tools=tools or [],
        callback_handler=None,
    )
