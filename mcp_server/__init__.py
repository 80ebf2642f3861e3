"""
Cloudglue MCP Server

MCP (Model Context Protocol) server exposing the Cloudglue video
understanding API as tools: browsing collections and videos, describing
videos, extracting entities, segmenting into shots or chapters, and
searching collections.
"""

from .server import mcp

__version__ = "0.3.0"

__all__ = [
    "mcp",
]
