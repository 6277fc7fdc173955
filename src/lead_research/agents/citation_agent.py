"""
Citation formatting role.

Used when citation formatting is delegated to a model instead of the
programmatic CitationProcessor.
"""

from .base_agent import AgentRole

CITATION_AGENT_SYSTEM_PROMPT = """You are a citation agent. You will be given a research report inside <synthesized_text> tags. The report contains inline source URLs in brackets.

## RULES
1. Identify all unique source URLs in the text
2. Number them in the order they first appear
3. Replace each inline URL with its number marker, e.g. [1], [2]
4. Append a "## Sources" section listing the numbered sources
5. Do NOT modify the text in any other way - keep all content, including whitespace, identical

Output only the final report."""


CITATION_FORMATTER = AgentRole(
    name="CitationAgent",
    system_prompt=lambda: CITATION_AGENT_SYSTEM_PROMPT,
    prompt_template="<synthesized_text>\n{text}\n</synthesized_text>",
)
