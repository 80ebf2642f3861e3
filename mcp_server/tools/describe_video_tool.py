from typing import Annotated, Optional

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server import dependencies
from mcp_server.server import mcp
from mcp_server.tools.common import JOB_HINTS, run_operation


@mcp.tool(
    name="describe_video",
    description="""Get a markdown description of a video's speech, on-screen text and visuals.

Reuses work already paid for: when `collection_id` names a media-descriptions collection holding the Cloudglue file, the stored description is returned; otherwise the most recent completed describe job for the URL is reused, and only as a last resort a new describe job is started and awaited.

Accepts Cloudglue file URLs (cloudglue://files/<id>), YouTube URLs and public HTTP video URLs. YouTube videos get speech and a summary only; Cloudglue files also get scene text and visual descriptions.

The description is paged in 5-minute windows: page 0 covers the first 5 minutes after `start_time_seconds`, page 1 the next 5 minutes, and so on. Every response carries `page` and `total_pages`.""",
    annotations=JOB_HINTS,
)
async def describe_video(
    url: Annotated[str, Field(description="Video URL: cloudglue://files/<id>, a YouTube URL or an HTTP video URL")],
    collection_id: Annotated[
        Optional[str],
        Field(description="Media-descriptions collection to read a stored description from (Cloudglue URLs only)"),
    ] = None,
    page: Annotated[int, Field(ge=0, description="Zero-based 5-minute window to return")] = 0,
    start_time_seconds: Annotated[int, Field(ge=0, description="Offset in seconds where paging starts")] = 0,
) -> str:
    return await run_operation(
        "describe_video",
        operations.describe_video,
        url=url,
        collection_id=collection_id,
        page=page,
        start_time_seconds=start_time_seconds,
        job_timeout=dependencies.get_job_timeout(),
    )
