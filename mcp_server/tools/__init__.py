"""
MCP Server Tools

Tool wrappers over the Cloudglue operations. Importing this package
registers every tool with the server.
"""

# Import all MCP tools to register them with the server
from mcp_server.tools.list_collections_tool import list_collections
from mcp_server.tools.list_videos_tool import list_videos
from mcp_server.tools.describe_video_tool import describe_video
from mcp_server.tools.extract_video_entities_tool import extract_video_entities
from mcp_server.tools.get_video_metadata_tool import get_video_metadata
from mcp_server.tools.segment_video_camera_shots_tool import segment_video_camera_shots
from mcp_server.tools.segment_video_chapters_tool import segment_video_chapters
from mcp_server.tools.retrieve_summaries_tool import retrieve_summaries
from mcp_server.tools.search_video_moments_tool import search_video_moments
from mcp_server.tools.search_video_summaries_tool import search_video_summaries

__all__ = [
    "list_collections",
    "list_videos",
    "describe_video",
    "extract_video_entities",
    "get_video_metadata",
    "segment_video_camera_shots",
    "segment_video_chapters",
    "retrieve_summaries",
    "search_video_moments",
    "search_video_summaries",
]
