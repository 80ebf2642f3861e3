"""
Catalog operations: listing, searching and file metadata.

These tools never create remote work; they read one or more platform
listings, reshape them and paginate with the item-window rules.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from ..exceptions import CloudglueMCPException, ValidationException
from ..providers.base import VideoPlatformProvider
from ..utils.error_handler import describe_error
from ..utils.time_utils import end_of_day_utc, parse_day, parse_timestamp, start_of_day_utc
from . import normalizer
from .models import CollectionHandle, CollectionType
from .pagination import compute_item_window

SEARCH_RESULT_LIMIT = 20
SCAN_PAGE_SIZE = 100
# Upper bound on stored descriptions read for local date filtering.
MAX_SCANNED_DESCRIPTIONS = 2000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

SUMMARY_COLLECTION_TYPES = (CollectionType.RICH_TRANSCRIPTS, CollectionType.MEDIA_DESCRIPTIONS)


def parse_date_range(created_after: Optional[str], created_before: Optional[str]) -> Tuple[Optional[datetime], Optional[datetime]]:
    """UTC bounds for a calendar-day filter: start of ``created_after``, end of ``created_before``."""
    after = start_of_day_utc(parse_day(created_after, "created_after")) if created_after else None
    before = end_of_day_utc(parse_day(created_before, "created_before")) if created_before else None
    return after, before


def is_empty_range(after: Optional[datetime], before: Optional[datetime]) -> bool:
    return after is not None and before is not None and after >= before


def within_range(timestamp: Optional[datetime], after: Optional[datetime], before: Optional[datetime]) -> bool:
    if after is None and before is None:
        return True
    if timestamp is None:
        # Undated items sort as the epoch: they pass a before-only filter and fail any after filter.
        timestamp = EPOCH
    if after is not None and not timestamp > after:
        return False
    if before is not None and not timestamp < before:
        return False
    return True


async def _completed_video_count(provider: VideoPlatformProvider, collection_id: Optional[str]) -> Optional[int]:
    if not collection_id:
        return None
    try:
        listing = await provider.list_collection_videos(collection_id, limit=1, offset=0, status="completed")
    except CloudglueMCPException as e:
        logger.warning(f"Could not count videos of collection {collection_id}: {e}")
        return None
    listing = listing or {}
    total = listing.get("total")
    return total if total is not None else len(listing.get("data") or [])


async def list_collections(provider: VideoPlatformProvider, page: int = 0, collection_type: Optional[str] = None) -> Dict[str, Any]:
    window = compute_item_window(page)
    try:
        listing = await provider.list_collections(
            limit=window.limit, offset=window.offset, collection_type=collection_type
        )
        collections = (listing or {}).get("data") or []
        counts = await asyncio.gather(
            *(_completed_video_count(provider, collection.get("id")) for collection in collections)
        )
    except CloudglueMCPException as e:
        return normalizer.list_envelope(
            "collections", [], page, 0,
            error=f"Failed to list collections: {describe_error(e)}",
            collection_type=collection_type,
        )

    processed = []
    for collection, count in zip(collections, counts):
        item = {
            "id": collection.get("id"),
            "name": collection.get("name"),
            "collection_type": collection.get("collection_type"),
            "created_at": collection.get("created_at"),
            "completed_video_count": count,
        }
        if collection.get("description") is not None:
            item["description"] = collection["description"]
        processed.append(item)

    total_pages = compute_item_window(page, (listing or {}).get("total") or 0).total_pages
    return normalizer.list_envelope("collections", processed, page, total_pages, collection_type=collection_type)


async def _collection_video(provider: VideoPlatformProvider, video: Dict[str, Any]) -> Dict[str, Any]:
    file = await provider.get_file(video["file_id"])
    return {
        **normalizer.file_summary(file or {}),
        "collection_id": video.get("collection_id"),
        "added_at": video.get("added_at"),
    }


async def list_videos(
    provider: VideoPlatformProvider,
    page: int = 0,
    collection_id: Optional[str] = None,
    created_after: Optional[str] = None,
    created_before: Optional[str] = None,
) -> Dict[str, Any]:
    echo = {"collection_id": collection_id, "created_after": created_after, "created_before": created_before}
    try:
        after, before = parse_date_range(created_after, created_before)
    except ValidationException as e:
        return normalizer.list_envelope("videos", [], page, 0, error=str(e), **echo)

    if is_empty_range(after, before):
        return normalizer.list_envelope("videos", [], page, 1, **echo)

    window = compute_item_window(page)
    try:
        if collection_id:
            # Collections filter on when a video was added, not when it was created.
            listing = await provider.list_collection_videos(
                collection_id,
                limit=window.limit,
                offset=window.offset,
                status="completed",
                added_after=created_after,
                added_before=created_before,
            )
            videos = await asyncio.gather(
                *(_collection_video(provider, video) for video in (listing or {}).get("data") or [])
            )
        else:
            listing = await provider.list_files(
                limit=window.limit,
                offset=window.offset,
                status="completed",
                created_after=created_after,
                created_before=created_before,
            )
            videos = [normalizer.file_summary(file) for file in (listing or {}).get("data") or []]
    except CloudglueMCPException as e:
        return normalizer.list_envelope("videos", [], page, 0, error=f"Failed to list videos: {describe_error(e)}", **echo)

    total_pages = compute_item_window(page, (listing or {}).get("total") or 0).total_pages
    return normalizer.list_envelope("videos", list(videos), page, total_pages, **echo)


async def _scan_descriptions(provider: VideoPlatformProvider, handle: CollectionHandle) -> List[Dict[str, Any]]:
    if handle.is_type(CollectionType.RICH_TRANSCRIPTS):
        lister = provider.list_rich_transcripts
    else:
        lister = provider.list_media_descriptions

    items: List[Dict[str, Any]] = []
    while len(items) < MAX_SCANNED_DESCRIPTIONS:
        batch = await lister(handle.id, limit=SCAN_PAGE_SIZE, offset=len(items))
        data = (batch or {}).get("data") or []
        items.extend(data)
        total = (batch or {}).get("total")
        if len(data) < SCAN_PAGE_SIZE or (total is not None and len(items) >= total):
            break
    return items


async def retrieve_summaries(
    provider: VideoPlatformProvider,
    collection_id: str,
    page: int = 0,
    created_after: Optional[str] = None,
    created_before: Optional[str] = None,
) -> Dict[str, Any]:
    def error(message: str, collection_type: Optional[str] = None) -> Dict[str, Any]:
        return normalizer.list_envelope(
            "summaries", [], page, 0, error=message,
            collection_type=collection_type, collection_id=collection_id,
        )

    try:
        after, before = parse_date_range(created_after, created_before)
    except ValidationException as e:
        return error(str(e))

    try:
        collection = await provider.get_collection(collection_id)
    except CloudglueMCPException as e:
        return error(f"Error fetching collection: {describe_error(e)}")

    if not collection or not collection.get("collection_type"):
        return error("Collection not found or invalid collection ID")

    handle = CollectionHandle.model_validate({"id": collection_id, **collection})
    if not handle.is_type(*SUMMARY_COLLECTION_TYPES):
        return error(
            f"Collection type '{handle.collection_type}' is not supported. "
            "This tool works with rich-transcripts and media-descriptions collections only.",
            handle.collection_type,
        )

    try:
        descriptions = await _scan_descriptions(provider, handle)
    except CloudglueMCPException as e:
        return error(f"Error fetching descriptions: {describe_error(e)}", handle.collection_type)

    filtered = [
        description for description in descriptions
        if within_range(
            parse_timestamp(description.get("created_at") or description.get("added_at")), after, before
        )
    ]

    window = compute_item_window(page, len(filtered))
    page_items = [] if window.is_empty else filtered[window.start:window.end]
    summaries = [
        {
            "title": normalizer.resolve_title(description.get("data")),
            "summary": normalizer.resolve_summary(description.get("data")),
            "file_id": description.get("file_id"),
        }
        for description in page_items
    ]

    return normalizer.list_envelope(
        "summaries",
        summaries,
        page,
        window.total_pages,
        collection_type=handle.collection_type,
        collection_id=collection_id,
        filtered_after=created_after,
        filtered_before=created_before,
    )


async def _search(provider: VideoPlatformProvider, results_key: str, scope: str, collection_id: str, query: str) -> Dict[str, Any]:
    try:
        response = await provider.search_content(
            collections=[collection_id], query=query, limit=SEARCH_RESULT_LIMIT, scope=scope
        )
    except CloudglueMCPException as e:
        target = "collection" if scope == "segment" else "videos"
        return normalizer.search_envelope(
            results_key, query, collection_id, [], error=f"Failed to search {target}: {describe_error(e)}"
        )
    return normalizer.search_envelope(results_key, query, collection_id, (response or {}).get("results"))


async def search_video_moments(provider: VideoPlatformProvider, collection_id: str, query: str) -> Dict[str, Any]:
    return await _search(provider, "moments_found", "segment", collection_id, query)


async def search_video_summaries(provider: VideoPlatformProvider, collection_id: str, query: str) -> Dict[str, Any]:
    return await _search(provider, "videos_found", "file", collection_id, query)


async def get_video_metadata(provider: VideoPlatformProvider, file_id: str, now: datetime) -> Dict[str, Any]:
    file_id = file_id.replace("cloudglue://files/", "", 1)
    try:
        file = await provider.get_file(file_id)
    except CloudglueMCPException as e:
        return normalizer.metadata_error(file_id, f"Failed to retrieve video metadata: {describe_error(e)}")

    file = file or {}
    if file.get("status") != "completed":
        return normalizer.incomplete_file_metadata(file_id, file)
    return normalizer.file_metadata(file, now)
