"""Configuration for MCP Server."""

import os
from dataclasses import dataclass
from enum import Enum
from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv())


class Transport(Enum):
    """Enumeration of supported MCP transports."""
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"
    SSE = "sse"


@dataclass
class MCPServerConfig:
    """Configuration for MCP Server."""

    transport: str = Transport.STDIO.value
    host: str = "0.0.0.0"
    port: int = 8000
    path: str = "/mcp"

    @property
    def is_http(self) -> bool:
        return self.transport != Transport.STDIO.value

    @classmethod
    def from_env(cls) -> "MCPServerConfig":
        """Create config from environment variables."""
        transport = os.getenv("MCP_TRANSPORT", "")
        if transport:
            # Fails loudly on typos instead of silently falling back to stdio
            transport = Transport(transport.lower()).value
        else:
            transport = Transport.STDIO.value

        return cls(
            transport=transport,
            host=os.getenv("MCP_HOST", "0.0.0.0"),
            port=int(os.getenv("MCP_PORT", "8000")),
            path=os.getenv("MCP_PATH", "/mcp"),
        )
