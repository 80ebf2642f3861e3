"""Shared plumbing for the tool wrappers."""

import json
from typing import Any, Awaitable, Callable, Dict

from loguru import logger

from mcp_server import dependencies

READ_ONLY_HINTS = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}

# Tools that may start a processing job on the platform
JOB_HINTS = {
    "readOnlyHint": False,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": True,
}


async def run_operation(tool_name: str, operation: Callable[..., Awaitable[Dict[str, Any]]], **kwargs) -> str:
    """Run an operation against the shared provider and render its envelope as JSON text."""
    logger.info(f"{tool_name} invoked with arguments: {kwargs}")
    try:
        provider = dependencies.get_video_provider()
        result = await operation(provider, **kwargs)
    except Exception as e:
        logger.exception(f"Exception occurred while running {tool_name}: {e}")
        raise
    if result.get("error"):
        logger.warning(f"{tool_name} returned an error envelope: {result['error']}")
    return json.dumps(result, indent=2)
