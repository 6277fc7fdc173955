"""
Structured output models validated by the capability provider.
"""

from pydantic import BaseModel, Field


class PlannerDecision(BaseModel):
    """Lead researcher output for one planning round."""

    synthesis: str | None = Field(
        default=None,
        description=(
            "A cumulative synthesis of all research findings so far, with source "
            "URLs inline in square brackets. Be comprehensive."
        ),
    )
    is_complete: bool = Field(
        description=(
            "Set to true ONLY when you have a comprehensive final answer and no "
            "more research is needed."
        ),
    )
    next_steps: list[str] | None = Field(
        default=None,
        description=(
            "A list of specific, parallelizable, and distinct research tasks for "
            "sub-agents. Empty if the research is complete. Mention only the task "
            "itself, e.g. 'research the latest developments in AI safety research'."
        ),
    )
