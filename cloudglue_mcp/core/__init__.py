from .operations import (
    TOOL_OPERATIONS,
    describe_video,
    extract_video_entities,
    get_video_metadata,
    list_collections,
    list_videos,
    retrieve_summaries,
    search_video_moments,
    search_video_summaries,
    segment_video_camera_shots,
    segment_video_chapters,
)

__all__ = [
    "TOOL_OPERATIONS",
    "describe_video",
    "extract_video_entities",
    "get_video_metadata",
    "list_collections",
    "list_videos",
    "retrieve_summaries",
    "search_video_moments",
    "search_video_summaries",
    "segment_video_camera_shots",
    "segment_video_chapters",
]
