"""
MCP server exposing lead research as background jobs.
"""
