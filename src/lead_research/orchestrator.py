"""
Research Orchestration Logic

Iterative lead-researcher loop: plan, delegate sub-tasks in parallel, fold the
findings into the research log, and repeat until the lead researcher is done
or the iteration budget runs out. The last synthesis is then citation
formatted and returned as the report.
"""

import time
import uuid
from collections.abc import Callable
from datetime import datetime
from typing import NamedTuple, Protocol, TypeVar

from .agents import (
    CITATION_FORMATTER,
    LEAD_RESEARCHER,
    RESEARCH_SUBAGENT,
    AgentRole,
    create_agent_manager,
)
from .delegation import SubTaskResult, delegate_subtasks
from .exceptions import CitationError, PlanningError
from .logger import setup_logging
from .models import create_model
from .schemas import PlannerDecision
from .settings import get_settings
from .state import ResearchContext, render_findings
from .types import ResearchResults, StopReason
from .web import SearchCache, WebContentFetcher

MAX_ITERATIONS = 3

OutputT = TypeVar("OutputT")


class ResearchCapabilities(Protocol):
    """Provider of the lead researcher, sub-agent and citation roles."""

    async def invoke(self, role: AgentRole[OutputT], text: str) -> OutputT: ...


class LoopOutcome(NamedTuple):
    """State of the iteration loop once it stops."""

    context: ResearchContext
    stop_reason: StopReason
    planning_rounds: int
    subtask_results: list[SubTaskResult]


class ResearchOrchestrator:
    """
    Drives the bounded plan-and-delegate research loop.

    One orchestrator may serve several queries; every call builds its own
    ResearchContext.
    """

    def __init__(
        self,
        capabilities: ResearchCapabilities,
        *,
        max_iterations: int = MAX_ITERATIONS,
        progress_callback: Callable[..., None] | None = None,
    ):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

        self.capabilities = capabilities
        self.max_iterations = max_iterations
        self.progress_callback = progress_callback
        self.research_logger = setup_logging()

    def _notify(self, event_type: str, **kwargs) -> None:
        if self.progress_callback:
            self.progress_callback(event_type, **kwargs)

    async def plan(self, context: ResearchContext, workflow_id: str) -> PlannerDecision:
        """
        Ask the lead researcher for the next decision.

        Raises:
            PlanningError: If the planning call fails for any reason
        """
        planner_input = context.planner_input()
        self.research_logger.info(
            f"🧠 [{workflow_id}] Invoking lead researcher with "
            f"{len(context.research_log)} log entries"
        )
        try:
            decision = await self.capabilities.invoke(LEAD_RESEARCHER, planner_input)
        except Exception as e:
            self.research_logger.error(f"❌ [{workflow_id}] Planning failed: {e}")
            raise PlanningError(
                f"Lead researcher failed for query '{context.user_query}': {e}"
            ) from e

        self.research_logger.info(f"✅ [{workflow_id}] Lead researcher plan received")
        return decision

    async def run_subtask(self, task: str) -> str:
        return await self.capabilities.invoke(RESEARCH_SUBAGENT, task)

    async def research(self, user_query: str) -> LoopOutcome:
        """
        Run the iteration loop for one query.

        Planning is strictly sequential; the only concurrency is the sub-task
        batch inside one iteration. The loop stops when the lead researcher
        reports completion, returns no next steps, or the iteration budget is
        used up.
        """
        workflow_id = str(uuid.uuid4())
        self.research_logger.info(
            f"🚀 [{workflow_id}] Starting research for: {user_query} "
            f"(max {self.max_iterations} iterations)"
        )

        context = ResearchContext.start(user_query)
        all_results: list[SubTaskResult] = []
        stop_reason: StopReason = "iteration_limit"
        planning_rounds = 0

        for iteration in range(1, self.max_iterations + 1):
            self.research_logger.info(
                f"🔁 [{workflow_id}] Iteration {iteration}/{self.max_iterations}"
            )
            self._notify(
                "iteration_started", iteration=iteration, max_iterations=self.max_iterations
            )

            decision = await self.plan(context, workflow_id)
            planning_rounds += 1

            if decision.synthesis:
                self.research_logger.info(
                    f"📝 [{workflow_id}] Synthesis updated ({len(decision.synthesis)} chars)"
                )
            context = context.with_synthesis(decision.synthesis)

            # Any one of these signals ends the loop
            if decision.is_complete or not decision.next_steps:
                stop_reason = "complete" if decision.is_complete else "no_next_steps"
                self.research_logger.info(
                    f"✅ [{workflow_id}] Research complete ({stop_reason}). Finalizing report."
                )
                break

            subtasks = decision.next_steps
            self.research_logger.info(
                f"📤 [{workflow_id}] Delegating {len(subtasks)} sub-tasks: "
                + "; ".join(subtasks)
            )
            self._notify("subtasks_delegated", iteration=iteration, total_count=len(subtasks))

            results = await delegate_subtasks(
                subtasks, self.run_subtask, batch_id=f"{workflow_id[:8]}-{iteration}"
            )
            all_results.extend(results)
            self._notify(
                "subtasks_settled",
                iteration=iteration,
                succeeded=sum(1 for result in results if result.succeeded),
                failed=sum(1 for result in results if not result.succeeded),
            )

            context = context.with_findings(render_findings(iteration, results))

            if context.completed_rounds >= self.max_iterations:
                self.research_logger.warning(
                    f"🏁 [{workflow_id}] Reached maximum iterations limit. Finalizing report."
                )

        return LoopOutcome(context, stop_reason, planning_rounds, all_results)

    async def finalize(self, context: ResearchContext) -> str:
        """
        Turn the last synthesis into the deliverable report.

        Falls back to the full research log when no synthesis was produced.

        Raises:
            CitationError: If citation formatting fails
        """
        if not context.final_report:
            self.research_logger.warning(
                "⚠️ No final report was synthesized. Returning raw research log."
            )
            return context.render_log()

        self.research_logger.info("✍️ Formatting citations...")
        try:
            return await self.capabilities.invoke(CITATION_FORMATTER, context.final_report)
        except Exception as e:
            self.research_logger.error(f"❌ Citation formatting failed: {e}")
            raise CitationError(f"Citation formatting failed: {e}") from e

    async def conduct_research(self, user_query: str) -> ResearchResults:
        """
        Run a full research process and return the report with run metadata.
        """
        research_start = time.time()
        self._notify("research_started", query=user_query, max_iterations=self.max_iterations)

        outcome = await self.research(user_query)

        self._notify("finalizing")
        report = await self.finalize(outcome.context)

        total_time = time.time() - research_start
        self.research_logger.info(
            f"🎯 Research for '{user_query}' finished in {total_time:.2f} seconds"
        )
        self._notify("research_completed", total_time=total_time)

        tracked_urls = getattr(self.capabilities, "tracked_urls", None)
        results = outcome.subtask_results
        return ResearchResults(
            query=user_query,
            report=report,
            iterations=outcome.planning_rounds,
            stop_reason=outcome.stop_reason,
            subtasks_total=len(results),
            subtasks_failed=sum(1 for result in results if not result.succeeded),
            sources_consulted=list(tracked_urls) if isinstance(tracked_urls, list) else [],
            generated_at=datetime.now().isoformat(),
        )

    async def run_research_process(self, user_query: str) -> str:
        """
        Research a query and return the markdown report.

        Raises:
            PlanningError: If any planning call fails
            CitationError: If citation formatting fails
        """
        results = await self.conduct_research(user_query)
        return results["report"]


def create_orchestrator(
    progress_callback: Callable[..., None] | None = None,
    *,
    max_iterations: int | None = None,
) -> ResearchOrchestrator:
    """Create an orchestrator wired to Strands agents from settings."""
    settings = get_settings()
    if max_iterations is None:
        max_iterations = settings.max_iterations

    cache = SearchCache(settings.search_cache_dir, settings.search_cache_ttl_hours)
    cache.cleanup_expired()

    agent_manager = create_agent_manager(
        create_model(),
        cache=cache,
        web_fetcher=WebContentFetcher(timeout=settings.fetch_timeout),
    )
    return ResearchOrchestrator(
        agent_manager,
        max_iterations=max_iterations,
        progress_callback=progress_callback,
    )


async def run_research_process(user_query: str) -> str:
    """Research a query with a freshly configured orchestrator."""
    return await create_orchestrator().run_research_process(user_query)
