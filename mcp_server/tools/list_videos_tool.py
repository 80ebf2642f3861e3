from typing import Annotated, Optional

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server.server import mcp
from mcp_server.tools.common import READ_ONLY_HINTS, run_operation


@mcp.tool(
    name="list_videos",
    description="""Browse video files with their id, filename, duration, status and creation time, optionally restricted to one collection and to a date range.

Dates are YYYY-MM-DD and both bounds are exclusive. Inside a collection the bounds apply to when a video was added to it; otherwise they apply to when the file was created. Only completed videos are listed for a collection.

Results come 25 videos per page (page 0 = first 25). Every response carries `page` and `total_pages`.""",
    annotations=READ_ONLY_HINTS,
)
async def list_videos(
    page: Annotated[int, Field(ge=0, description="Zero-based page number, 25 videos per page")] = 0,
    collection_id: Annotated[Optional[str], Field(description="Only list videos of this collection")] = None,
    created_after: Annotated[Optional[str], Field(description="Only videos after this date (YYYY-MM-DD)")] = None,
    created_before: Annotated[Optional[str], Field(description="Only videos before this date (YYYY-MM-DD)")] = None,
) -> str:
    return await run_operation(
        "list_videos",
        operations.list_videos,
        page=page,
        collection_id=collection_id,
        created_after=created_after,
        created_before=created_before,
    )
