"""
Agent manager implementation.

Provides the research capabilities (planning, sub-task research, citation
formatting) on top of Strands agents, with an optional sub-agent model pool.
"""

import itertools
import logging
import time
import uuid
from collections.abc import Callable
from typing import Any, Literal, TypeVar

from strands.models.model import Model

from ..models import ModelFactory
from ..processing import CitationProcessor
from ..settings import get_settings
from ..tools import create_search_tools
from ..web import SearchCache, WebContentFetcher
from .base_agent import AgentRole, build_agent, extract_content_text
from .citation_agent import CITATION_FORMATTER

OutputT = TypeVar("OutputT")

logger = logging.getLogger("research")


class AgentManager:
    """Runs research roles on Strands agents, one fresh agent per invocation."""

    def __init__(
        self,
        model: Model,
        subagent_models: list[Model] | None = None,
        citation_mode: Literal["programmatic", "agent"] = "programmatic",
        *,
        cache: SearchCache,
        web_fetcher: WebContentFetcher,
    ):
        """
        Initialize the agent manager.

        Args:
            model: Model used by the lead researcher and the citation agent
            subagent_models: Models rotated across sub-agents; defaults to ``model``
            citation_mode: "programmatic" formats citations with CitationProcessor,
                "agent" delegates to the citation agent
            cache: Search cache shared by the sub-agent tools
            web_fetcher: Page fetcher shared by the sub-agent tools
        """
        self.model = model
        self.subagent_models = subagent_models or [model]
        self.citation_mode = citation_mode
        self.citation_processor = CitationProcessor()

        # URLs fetched successfully by any sub-agent
        self.tracked_urls: list[str] = []

        self.research_tools = create_search_tools(self, cache, web_fetcher)
        self._subagent_counter = itertools.count()

        self._local_handlers: dict[str, Callable[[str], str]] = {}
        if citation_mode == "programmatic":
            self._local_handlers[CITATION_FORMATTER.name] = (
                self.citation_processor.format_report
            )

    def track_url(self, url: str) -> None:
        if url not in self.tracked_urls:
            self.tracked_urls.append(url)

    def next_subagent_model(self) -> Model:
        """Pick the next model from the sub-agent pool, round robin."""
        return self.subagent_models[next(self._subagent_counter) % len(self.subagent_models)]

    async def invoke(self, role: AgentRole[OutputT], text: str) -> OutputT:
        """
        Run one role on the given input.

        Roles with an output model return a validated instance of it; other
        roles return the agent's final text. Validation failures and model
        errors propagate to the caller.

        Args:
            role: Role to run
            text: Input text for the role

        Returns:
            The role's output
        """
        local_handler = self._local_handlers.get(role.name)
        if local_handler is not None:
            return local_handler(text)  # type: ignore[return-value]

        invocation_id = f"{role.name}-{uuid.uuid4().hex[:8]}"
        invocation_start = time.time()

        if role.uses_tools:
            agent = build_agent(role, self.next_subagent_model(), self.research_tools)
        else:
            agent = build_agent(role, self.model)
        logger.info(
            f"🎭 [{invocation_id}] Using model: {getattr(agent.model, 'config', {}).get('model_id', 'unknown')}"
        )

        prompt = role.render_prompt(text)
        output: Any
        if role.output_model is not None:
            output = await agent.structured_output_async(role.output_model, prompt)
        else:
            response = await agent.invoke_async(prompt)
            output = "".join(map(extract_content_text, response.message["content"]))

        logger.info(
            f"✅ [{invocation_id}] Completed in {time.time() - invocation_start:.2f} seconds"
        )
        return output


def create_agent_manager(
    model: Model,
    *,
    cache: SearchCache,
    web_fetcher: WebContentFetcher,
) -> AgentManager:
    """Convenience function to create an agent manager from settings."""
    settings = get_settings()

    subagent_models: list[Model] = []
    for model_id in settings.bedrock_subagent_models_list:
        try:
            subagent_models.append(ModelFactory.create_model(model_id=model_id))
            logger.info(f"🎭 Created subagent model: {model_id}")
        except Exception as e:
            logger.warning(f"⚠️ Failed to create subagent model {model_id}: {e}")

    if not subagent_models:
        logger.info("🎭 No subagent model pool available, using main model for all agents")

    return AgentManager(
        model,
        subagent_models,
        settings.citation_mode,
        cache=cache,
        web_fetcher=web_fetcher,
    )
