"""Tests for camera shot and chapter segmentation."""

import pytest

from cloudglue_mcp.core.operations import segment_video_camera_shots, segment_video_chapters

HTTP_URL = "https://example.com/match.mp4"
YOUTUBE_URL = "https://www.youtube.com/watch?v=abc123"

SHOTS = [
    {"start_time": 0, "end_time": 4.5},
    {"start_time": 4.5, "end_time": 70},
]


class TestCameraShots:
    @pytest.mark.asyncio
    async def test_youtube_is_rejected_without_remote_calls(self, fake_provider) -> None:
        result = await segment_video_camera_shots(fake_provider, YOUTUBE_URL)

        assert result["error"].startswith("YouTube URLs are not supported for camera shot segmentation")
        assert result["segments"] == []
        assert result["total_shots"] == 0
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_prior_job_is_reused(self, fake_provider) -> None:
        fake_provider.add_job("segments", HTTP_URL, criteria="shot", segments=SHOTS)

        result = await segment_video_camera_shots(fake_provider, HTTP_URL)

        assert result["source"] == "existing"
        assert result["total_shots"] == 2
        assert result["segments"][1] == {
            "start_time": 4.5,
            "end_time": 70,
            "start_time_formatted": "00:04",
            "end_time_formatted": "01:10",
            "duration_seconds": 65.5,
        }
        assert fake_provider.calls_to("list_jobs")[0]["criteria"] == "shot"
        assert fake_provider.created_jobs == []

    @pytest.mark.asyncio
    async def test_narrative_job_is_not_reused_for_shots(self, fake_provider) -> None:
        fake_provider.add_job("segments", HTTP_URL, criteria="narrative", segments=SHOTS)
        fake_provider.new_job_fields["segments"] = {"segments": SHOTS[:1]}

        result = await segment_video_camera_shots(fake_provider, HTTP_URL)

        assert result["source"] == "new"
        assert result["total_shots"] == 1
        (created,) = fake_provider.created_jobs
        assert created["payload"] == {"url": HTTP_URL, "criteria": "shot"}

    @pytest.mark.asyncio
    async def test_prior_job_without_segments_is_skipped(self, fake_provider) -> None:
        fake_provider.add_job("segments", HTTP_URL, criteria="shot", segments=[])
        fake_provider.new_job_fields["segments"] = {"segments": SHOTS}

        result = await segment_video_camera_shots(fake_provider, HTTP_URL)

        assert result["source"] == "new"


class TestChapters:
    @pytest.mark.asyncio
    async def test_youtube_is_supported(self, fake_provider) -> None:
        fake_provider.new_job_fields["segments"] = {"segments": [{"start_time": 0, "end_time": 3700}]}

        result = await segment_video_chapters(fake_provider, YOUTUBE_URL)

        assert result["chapters"] == [
            {
                "chapter_number": 1,
                "start_time": 0,
                "start_time_formatted": "00:00",
                "end_time": 3700,
                "end_time_formatted": "01:01:40",
                "duration_seconds": 3700,
                "description": "Chapter 1",
            }
        ]
        assert "prompt" not in result

    @pytest.mark.asyncio
    async def test_prior_job_without_prompt_is_reused(self, fake_provider) -> None:
        fake_provider.add_job(
            "segments",
            HTTP_URL,
            criteria="narrative",
            narrative_config={},
            segments=[{"start_time": 0, "end_time": 60, "description": "Opening"}],
        )

        result = await segment_video_chapters(fake_provider, HTTP_URL)

        assert result["source"] == "existing"
        assert result["chapters"][0]["description"] == "Opening"

    @pytest.mark.asyncio
    async def test_different_prompt_creates_new_job(self, fake_provider) -> None:
        fake_provider.add_job(
            "segments",
            HTTP_URL,
            criteria="narrative",
            narrative_config={"prompt": "by speaker"},
            segments=[{"start_time": 0, "end_time": 60}],
        )
        fake_provider.new_job_fields["segments"] = {"segments": [{"start_time": 0, "end_time": 30}]}

        result = await segment_video_chapters(fake_provider, HTTP_URL, prompt="by topic")

        assert result["source"] == "new"
        assert result["prompt"] == "by topic"
        (created,) = fake_provider.created_jobs
        assert created["payload"]["narrative_config"] == {"prompt": "by topic"}

    @pytest.mark.asyncio
    async def test_new_job_without_segments_is_reported(self, fake_provider) -> None:
        result = await segment_video_chapters(fake_provider, HTTP_URL)

        assert result["chapters"] == []
        assert result["total_chapters"] == 0
        assert result["error"].startswith("Failed to create chapter segmentation - job did not complete successfully")
