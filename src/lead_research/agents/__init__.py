"""
Agents package for research orchestration.

Role definitions and the Strands-backed agent manager that runs them.
"""

from .agent_manager import AgentManager, create_agent_manager
from .base_agent import AgentRole, build_agent, extract_content_text
from .citation_agent import CITATION_FORMATTER
from .lead_researcher import LEAD_RESEARCHER
from .research_agent import RESEARCH_SUBAGENT

__all__ = [
    "AgentManager",
    "AgentRole",
    "CITATION_FORMATTER",
    "LEAD_RESEARCHER",
    "RESEARCH_SUBAGENT",
    "build_agent",
    "create_agent_manager",
    "extract_content_text",
]
