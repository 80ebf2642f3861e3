from typing import Annotated, Literal, Optional

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server.server import mcp
from mcp_server.tools.common import READ_ONLY_HINTS, run_operation


@mcp.tool(
    name="list_collections",
    description="""List the video collections available on the account with their id, name, type, creation time and number of completed videos.

Call this first to learn which collection ids exist before using the collection-aware tools:
- 'media-descriptions' collections can be passed to describe_video as collection_id
- 'entities' collections can be passed to extract_video_entities as collection_id
- 'rich-transcripts' and 'media-descriptions' collections work with retrieve_summaries and the search tools

Results come 25 collections per page (page 0 = first 25). Every response carries `page` and `total_pages`.""",
    annotations=READ_ONLY_HINTS,
)
async def list_collections(
    page: Annotated[int, Field(ge=0, description="Zero-based page number, 25 collections per page")] = 0,
    collection_type: Annotated[
        Optional[Literal["entities", "rich-transcripts", "media-descriptions"]],
        Field(description="Only return collections of this type"),
    ] = None,
) -> str:
    return await run_operation(
        "list_collections",
        operations.list_collections,
        page=page,
        collection_type=collection_type,
    )
