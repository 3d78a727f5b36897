"""Core business logic: numeric coercion, overrides, scoring, API client, data models.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
Starlette, or any server framework.
"""
