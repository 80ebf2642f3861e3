from typing import Annotated

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server.server import mcp
from mcp_server.tools.common import READ_ONLY_HINTS, run_operation


@mcp.tool(
    name="search_video_summaries",
    description="""Semantic search for whole videos in a rich-transcripts or media-descriptions collection, matched against their content and summaries.

Returns up to 20 matching videos with relevance scores. Good for finding videos on a topic.""",
    annotations=READ_ONLY_HINTS,
)
async def search_video_summaries(
    collection_id: Annotated[str, Field(description="Collection to search")],
    query: Annotated[str, Field(description="Natural language description of the videos to find")],
) -> str:
    return await run_operation(
        "search_video_summaries",
        operations.search_video_summaries,
        collection_id=collection_id,
        query=query,
    )
