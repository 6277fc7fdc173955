"""
Research process errors.

Sub-task failures never surface here; they are folded into the research log.
"""


class ResearchError(RuntimeError):
    """Unrecoverable failure of a research process."""


class PlanningError(ResearchError):
    """The lead researcher could not produce a plan."""


class CitationError(ResearchError):
    """Citation formatting of the final synthesis failed."""
