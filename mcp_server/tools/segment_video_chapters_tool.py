from typing import Annotated, Optional

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server import dependencies
from mcp_server.server import mcp
from mcp_server.tools.common import JOB_HINTS, run_operation


@mcp.tool(
    name="segment_video_chapters",
    description="""Split a video into narrative chapters, each with start and end timestamps and a short description.

A completed chapter segmentation of the URL made with the same prompt is reused when there is one; otherwise a new job is started and awaited. The `source` field tells which happened.

Accepts Cloudglue file URLs, YouTube URLs, public HTTP video URLs and data connector URLs (Dropbox, Google Drive, Zoom).""",
    annotations=JOB_HINTS,
)
async def segment_video_chapters(
    url: Annotated[str, Field(description="Video URL in any supported format")],
    prompt: Annotated[Optional[str], Field(description="Optional guidance on how chapters should be cut")] = None,
) -> str:
    return await run_operation(
        "segment_video_chapters",
        operations.segment_video_chapters,
        url=url,
        prompt=prompt,
        job_timeout=dependencies.get_job_timeout(),
    )
