"""Core library for the Cloudglue MCP server."""

__version__ = "0.3.0"
