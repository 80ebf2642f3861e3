from typing import Annotated, Optional

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server.server import mcp
from mcp_server.tools.common import READ_ONLY_HINTS, run_operation


@mcp.tool(
    name="retrieve_summaries",
    description="""Retrieve the title and summary of every video in a rich-transcripts or media-descriptions collection.

A cheap way to get an overview of a collection before pulling full descriptions of single videos. For targeted lookups prefer search_video_summaries or search_video_moments.

Dates are YYYY-MM-DD and both bounds are exclusive. Results come 25 summaries per page (page 0 = first 25); page through to cover the whole collection. Every response carries `page` and `total_pages`.""",
    annotations=READ_ONLY_HINTS,
)
async def retrieve_summaries(
    collection_id: Annotated[str, Field(description="Id of a rich-transcripts or media-descriptions collection")],
    page: Annotated[int, Field(ge=0, description="Zero-based page number, 25 summaries per page")] = 0,
    created_after: Annotated[Optional[str], Field(description="Only summaries created after this date (YYYY-MM-DD)")] = None,
    created_before: Annotated[Optional[str], Field(description="Only summaries created before this date (YYYY-MM-DD)")] = None,
) -> str:
    return await run_operation(
        "retrieve_summaries",
        operations.retrieve_summaries,
        collection_id=collection_id,
        page=page,
        created_after=created_after,
        created_before=created_before,
    )
