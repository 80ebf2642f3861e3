from typing import Annotated

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server.server import mcp
from mcp_server.tools.common import READ_ONLY_HINTS, run_operation


@mcp.tool(
    name="search_video_moments",
    description="""Semantic search for individual moments inside the videos of a collection, matching speech, on-screen text and visual descriptions.

Returns up to 20 matching segments with their timestamps. Good for finding a specific remark or scene.""",
    annotations=READ_ONLY_HINTS,
)
async def search_video_moments(
    collection_id: Annotated[str, Field(description="Collection to search")],
    query: Annotated[str, Field(description="Natural language description of the moment to find")],
) -> str:
    return await run_operation(
        "search_video_moments",
        operations.search_video_moments,
        collection_id=collection_id,
        query=query,
    )
