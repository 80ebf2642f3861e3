"""End-to-end tests through the FastMCP in-memory client."""

import json

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from cloudglue_mcp.core.operations import TOOL_OPERATIONS
from mcp_server import dependencies
from mcp_server.main import build_parser
from mcp_server.server import mcp
import mcp_server.tools  # noqa: F401


@pytest.fixture
def served_provider(fake_provider, monkeypatch):
    monkeypatch.setattr(dependencies, "get_video_provider", lambda: fake_provider)
    monkeypatch.setattr(dependencies, "get_job_timeout", lambda: 5)
    return fake_provider


async def _call(name, arguments):
    async with Client(mcp) as client:
        result = await client.call_tool(name, arguments)
    return json.loads(result.content[0].text)


class TestToolRegistration:
    @pytest.mark.asyncio
    async def test_all_tools_are_registered(self) -> None:
        async with Client(mcp) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == set(TOOL_OPERATIONS)

    @pytest.mark.asyncio
    async def test_job_tools_are_not_read_only(self) -> None:
        async with Client(mcp) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        assert tools["describe_video"].annotations.readOnlyHint is False
        assert tools["search_video_moments"].annotations.readOnlyHint is True
        assert tools["segment_video_chapters"].annotations.idempotentHint is True


class TestToolCalls:
    @pytest.mark.asyncio
    async def test_list_videos_returns_envelope(self, served_provider) -> None:
        result = await _call("list_videos", {"created_after": "2024-03-01", "created_before": "2024-02-01"})

        assert result == {
            "videos": [],
            "page": 0,
            "total_pages": 1,
            "created_after": "2024-03-01",
            "created_before": "2024-02-01",
        }

    @pytest.mark.asyncio
    async def test_camera_shots_rejects_youtube(self, served_provider) -> None:
        result = await _call("segment_video_camera_shots", {"url": "https://youtu.be/abc123"})

        assert result["total_shots"] == 0
        assert "YouTube URLs are not supported" in result["error"]
        assert served_provider.calls == []

    @pytest.mark.asyncio
    async def test_describe_video_from_collection(self, served_provider) -> None:
        served_provider.media_descriptions[("col-1", "file-1")] = {"content": "text", "duration_seconds": 1000}

        result = await _call(
            "describe_video", {"url": "cloudglue://files/file-1", "collection_id": "col-1", "page": 2}
        )

        assert result == {"description": "description 600-900", "page": 2, "total_pages": 4}

    @pytest.mark.asyncio
    async def test_negative_page_is_rejected(self, served_provider) -> None:
        with pytest.raises(ToolError):
            await _call("list_collections", {"page": -1})
        assert served_provider.calls == []


def test_cli_arguments() -> None:
    args = build_parser().parse_args(["--api-key", "k", "--transport", "sse", "--port", "9000"])

    assert args.api_key == "k"
    assert args.transport == "sse"
    assert args.port == 9000
    assert args.host is None
