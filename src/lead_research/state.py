"""
Research context threaded through the iteration loop.

The context is an immutable value: every step returns a new context built
from the previous one, so the research log can only ever grow.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace

from .delegation import Success, SubTaskResult


@dataclass(frozen=True)
class ResearchContext:
    """State of one research process."""

    user_query: str
    research_log: tuple[str, ...] = ()
    final_report: str = ""
    completed_rounds: int = 0

    @classmethod
    def start(cls, user_query: str) -> "ResearchContext":
        return cls(user_query=user_query, research_log=(f'Initial Query: "{user_query}"',))

    def with_synthesis(self, synthesis: str | None) -> "ResearchContext":
        """Replace the final report when a synthesis was produced."""
        if not synthesis:
            return self
        return replace(self, final_report=synthesis)

    def with_findings(self, entries: Iterable[str]) -> "ResearchContext":
        """Append one delegation round's entries to the log."""
        return replace(
            self,
            research_log=self.research_log + tuple(entries),
            completed_rounds=self.completed_rounds + 1,
        )

    def render_log(self) -> str:
        return "\n\n".join(self.research_log)

    def planner_input(self) -> str:
        """Text handed to the lead researcher."""
        return (
            f'Original Query: "{self.user_query}"\n\n'
            f"Current Research Log (all findings so far):\n{self.render_log()}"
        )


def render_findings(iteration: int, results: Iterable[SubTaskResult]) -> list[str]:
    """
    Render a delegation round as research log entries.

    The header comes first, then one entry per sub-task in task order.
    """
    entries = [f"--- Findings from Iteration {iteration} ---"]
    for result in results:
        if isinstance(result.outcome, Success):
            entries.append(
                f"Sub-task: {result.task}\nResult: {result.outcome.finding}\n"
            )
        else:
            entries.append(
                f"Sub-task: {result.task}\nResult: FAILED\nError: {result.outcome.error}"
            )
    return entries
