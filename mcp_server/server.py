from fastmcp import FastMCP
from loguru import logger
from starlette.responses import JSONResponse

from cloudglue_mcp import __version__

SERVICE_NAME = "cloudglue-mcp-server"

try:
    logger.info("Instantiating the FastMCP object")
    mcp = FastMCP(name=SERVICE_NAME)
    logger.info("Successfully created an instance of FastMCP server")
except Exception as e:
    logger.exception(f"Exception occurred while creating an instance of FastMCP Server: {e}")
    raise


# Health check endpoint, only served over the HTTP transports
@mcp.custom_route("/", methods=["GET"])
async def health_check(request):
    """Health check endpoint for container orchestration and monitoring"""
    return JSONResponse({
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": __version__
    })
