"""Core business logic: provider clients, scoring, caching, and data models.

This module is framework-agnostic. It has no dependency on MCP, FastMCP,
or any server framework.
"""
