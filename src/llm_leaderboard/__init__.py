"""LLM Leaderboard MCP Server.

Ask your AI which language model leads: benchmark scores, pricing, and speed
from Artificial Analysis, normalized, scored, and served as a sortable leaderboard.
"""

__version__ = "0.1.0"
