"""
Lead Research Package

Iterative multi-agent research built on the Strands Agents framework: a lead
researcher plans and synthesizes while parallel sub-agents search the web.
"""

from lead_research.exceptions import CitationError, PlanningError, ResearchError
from lead_research.logger import setup_logging
from lead_research.orchestrator import (
    ResearchOrchestrator,
    create_orchestrator,
    run_research_process,
)

__version__ = "1.0.0"
__all__ = [
    "CitationError",
    "PlanningError",
    "ResearchError",
    "ResearchOrchestrator",
    "create_orchestrator",
    "run_research_process",
    "setup_logging",
]
