"""Tool dispatch table: one coroutine per tool, each returning its envelope."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..providers.base import VideoPlatformProvider
from .catalog import (
    list_collections,
    list_videos,
    retrieve_summaries,
    search_video_moments,
    search_video_summaries,
    get_video_metadata as _get_video_metadata,
)
from .jobs import JobLifecycleDriver
from .resolver import (
    ChapterSegmentResolver,
    DescribeResolver,
    ExtractResolver,
    ShotSegmentResolver,
)

DEFAULT_JOB_TIMEOUT = 600.0


def _driver(provider: VideoPlatformProvider, job_timeout: float) -> JobLifecycleDriver:
    return JobLifecycleDriver(provider, job_timeout=job_timeout)


async def describe_video(
    provider: VideoPlatformProvider,
    url: str,
    collection_id: Optional[str] = None,
    page: int = 0,
    start_time_seconds: int = 0,
    job_timeout: float = DEFAULT_JOB_TIMEOUT,
) -> Dict[str, Any]:
    resolver = DescribeResolver(
        provider,
        _driver(provider, job_timeout),
        url,
        collection_id=collection_id,
        page=page,
        start_time_seconds=start_time_seconds,
    )
    return await resolver.resolve()


async def extract_video_entities(
    provider: VideoPlatformProvider,
    url: str,
    prompt: Optional[str] = None,
    collection_id: Optional[str] = None,
    page: int = 0,
    job_timeout: float = DEFAULT_JOB_TIMEOUT,
) -> Dict[str, Any]:
    resolver = ExtractResolver(
        provider,
        _driver(provider, job_timeout),
        url,
        collection_id=collection_id,
        page=page,
        prompt=prompt,
    )
    return await resolver.resolve()


async def segment_video_camera_shots(
    provider: VideoPlatformProvider,
    url: str,
    job_timeout: float = DEFAULT_JOB_TIMEOUT,
) -> Dict[str, Any]:
    return await ShotSegmentResolver(provider, _driver(provider, job_timeout), url).resolve()


async def segment_video_chapters(
    provider: VideoPlatformProvider,
    url: str,
    prompt: Optional[str] = None,
    job_timeout: float = DEFAULT_JOB_TIMEOUT,
) -> Dict[str, Any]:
    return await ChapterSegmentResolver(provider, _driver(provider, job_timeout), url, prompt=prompt).resolve()


async def get_video_metadata(
    provider: VideoPlatformProvider,
    file_id: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    return await _get_video_metadata(provider, file_id, now or datetime.now(timezone.utc))


TOOL_OPERATIONS = {
    "list_collections": list_collections,
    "list_videos": list_videos,
    "describe_video": describe_video,
    "extract_video_entities": extract_video_entities,
    "get_video_metadata": get_video_metadata,
    "segment_video_camera_shots": segment_video_camera_shots,
    "segment_video_chapters": segment_video_chapters,
    "retrieve_summaries": retrieve_summaries,
    "search_video_moments": search_video_moments,
    "search_video_summaries": search_video_summaries,
}
