from typing import Annotated, Optional

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server import dependencies
from mcp_server.server import mcp
from mcp_server.tools.common import JOB_HINTS, run_operation


@mcp.tool(
    name="extract_video_entities",
    description="""Extract structured entities from a video, guided by a prompt describing what to pull out.

Two ways to call it:
1. With `collection_id` (an entities collection) and a Cloudglue file URL: returns the entities already stored for that file. If none are stored and a prompt is given, falls through to extraction.
2. With `prompt`: reuses the latest completed extraction of the URL made with the same prompt, or starts a new extraction and waits for it.

At least one of `collection_id` or `prompt` is required. Results are only as good as the prompt is specific.

Segment-level entities are paged 25 per page (page 0 = first 25); video-level entities are returned on every page. Every response carries `page` and `total_pages`.""",
    annotations=JOB_HINTS,
)
async def extract_video_entities(
    url: Annotated[str, Field(description="Video URL: cloudglue://files/<id>, a YouTube URL or an HTTP video URL")],
    prompt: Annotated[Optional[str], Field(description="What to extract, e.g. 'products mentioned and their prices'")] = None,
    collection_id: Annotated[
        Optional[str],
        Field(description="Entities collection to read stored entities from (Cloudglue URLs only)"),
    ] = None,
    page: Annotated[int, Field(ge=0, description="Zero-based page of segment-level entities, 25 per page")] = 0,
) -> str:
    return await run_operation(
        "extract_video_entities",
        operations.extract_video_entities,
        url=url,
        prompt=prompt,
        collection_id=collection_id,
        page=page,
        job_timeout=dependencies.get_job_timeout(),
    )
