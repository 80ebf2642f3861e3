import argparse
import os

from loguru import logger

from cloudglue_mcp.config.settings import AppConfig
from cloudglue_mcp.utils.logging_config import log_manager
from mcp_server import dependencies
from mcp_server.config import MCPServerConfig, Transport
from mcp_server.server import mcp
import mcp_server.tools  # noqa: F401  registers the tools


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cloudglue-mcp-server",
        description="MCP server for the Cloudglue video understanding API",
    )
    parser.add_argument("--api-key", help="Cloudglue API key (overrides CLOUDGLUE_API_KEY)")
    parser.add_argument("--base-url", help="Cloudglue API base URL (overrides CLOUDGLUE_BASE_URL)")
    parser.add_argument(
        "--transport",
        choices=[t.value for t in Transport],
        help="MCP transport (overrides MCP_TRANSPORT, default stdio)",
    )
    parser.add_argument("--host", help="Bind address for HTTP transports (overrides MCP_HOST)")
    parser.add_argument("--port", type=int, help="Port for HTTP transports (overrides MCP_PORT)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # CLI flags win over the environment and .env
    if args.api_key:
        os.environ["CLOUDGLUE_API_KEY"] = args.api_key
    if args.base_url:
        os.environ["CLOUDGLUE_BASE_URL"] = args.base_url
    dependencies.configure(api_key=args.api_key, base_url=args.base_url)

    app_config = AppConfig()
    log_manager.configure(app_config.logging)

    server_config = MCPServerConfig.from_env()
    if args.transport:
        server_config.transport = args.transport
    if args.host:
        server_config.host = args.host
    if args.port:
        server_config.port = args.port

    if not app_config.cloudglue.api_key:
        logger.warning("No Cloudglue API key configured; tool calls will fail until CLOUDGLUE_API_KEY is set")

    if server_config.is_http:
        logger.info(
            f"Starting {app_config.app_name} v{app_config.app_version} with {server_config.transport} on "
            f"http://{server_config.host}:{server_config.port}{server_config.path}"
        )
        mcp.run(
            transport=server_config.transport,
            host=server_config.host,
            port=server_config.port,
            path=server_config.path,
        )
    else:
        logger.info(f"Starting {app_config.app_name} v{app_config.app_version} over stdio")
        mcp.run(transport="stdio")


if __name__ == '__main__':
    main()
