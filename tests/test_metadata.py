"""Tests for get_video_metadata."""

from datetime import datetime, timezone

import pytest

from cloudglue_mcp.core.operations import get_video_metadata

NOW = datetime(2024, 1, 25, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def completed_file():
    return {
        "id": "file-1",
        "filename": "keynote.mp4",
        "uri": "s3://bucket/keynote.mp4",
        "status": "completed",
        "created_at": "2024-01-15T10:00:00Z",
        "updated_at": "2024-01-15T10:05:00Z",
        "file_size": 1048576,
        "mime_type": "video/mp4",
        "metadata": {"team": "events"},
        "processing_started_at": "2024-01-15T10:01:00Z",
        "processing_completed_at": "2024-01-15T10:03:30Z",
        "video_info": {"duration_seconds": 3661, "has_audio": True, "width": 1920, "height": 1080, "fps": 30},
    }


class TestGetVideoMetadata:
    @pytest.mark.asyncio
    async def test_completed_file(self, fake_provider, completed_file) -> None:
        fake_provider.files["file-1"] = completed_file

        result = await get_video_metadata(fake_provider, "file-1", now=NOW)

        assert result["file_id"] == "file-1"
        assert result["video_info"]["duration_formatted"] == "01:01:01"
        assert (result["video_info"]["width"], result["video_info"]["height"]) == (1920, 1080)
        assert result["video_info"]["codec"] is None
        assert result["computed"] == {"file_age_days": 9, "processing_duration_seconds": 150}
        assert result["processing_info"]["processing_started_at"] == "2024-01-15T10:01:00Z"
        assert "error" not in result

    @pytest.mark.asyncio
    async def test_accepts_platform_url(self, fake_provider, completed_file) -> None:
        fake_provider.files["file-1"] = completed_file

        await get_video_metadata(fake_provider, "cloudglue://files/file-1", now=NOW)

        assert fake_provider.calls_to("get_file") == [{"file_id": "file-1"}]

    @pytest.mark.asyncio
    async def test_incomplete_file(self, fake_provider, completed_file) -> None:
        fake_provider.files["file-1"] = {**completed_file, "status": "processing"}

        result = await get_video_metadata(fake_provider, "file-1", now=NOW)

        assert result["error"] == "Video is in processing status and metadata may be incomplete"
        assert result["metadata"]["filename"] == "keynote.mp4"
        assert result["video_info"] is None

    @pytest.mark.asyncio
    async def test_missing_file(self, fake_provider) -> None:
        result = await get_video_metadata(fake_provider, "nope", now=NOW)

        assert result["error"].startswith("Failed to retrieve video metadata:")
        assert result["file_id"] == "nope"
        assert result["computed"] is None
