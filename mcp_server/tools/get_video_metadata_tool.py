from typing import Annotated

from pydantic import Field

from cloudglue_mcp.core import operations
from mcp_server.server import mcp
from mcp_server.tools.common import READ_ONLY_HINTS, run_operation


@mcp.tool(
    name="get_video_metadata",
    description="""Get technical metadata for a Cloudglue video file: duration, resolution, frame rate, file size, processing status and derived figures such as file age and processing time.

Use this for technical details rather than content; for what happens in the video use describe_video.""",
    annotations=READ_ONLY_HINTS,
)
async def get_video_metadata(
    file_id: Annotated[str, Field(description="Cloudglue file id (a cloudglue://files/<id> URL is also accepted)")],
) -> str:
    return await run_operation("get_video_metadata", operations.get_video_metadata, file_id=file_id)
