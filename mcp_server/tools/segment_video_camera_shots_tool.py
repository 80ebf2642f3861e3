from typing import Annotated

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server import dependencies
from mcp_server.server import mcp
from mcp_server.tools.common import JOB_HINTS, run_operation


@mcp.tool(
    name="segment_video_camera_shots",
    description="""Split a video into camera shots and return the start, end and duration of each one.

The most recent completed shot segmentation of the URL is reused when there is one; otherwise a new segmentation job is started and awaited. The `source` field tells which happened.

Accepts Cloudglue file URLs and public HTTP video URLs. YouTube URLs are not supported.""",
    annotations=JOB_HINTS,
)
async def segment_video_camera_shots(
    url: Annotated[str, Field(description="Video URL: cloudglue://files/<id> or an HTTP video URL")],
) -> str:
    return await run_operation(
        "segment_video_camera_shots",
        operations.segment_video_camera_shots,
        url=url,
        job_timeout=dependencies.get_job_timeout(),
    )
