"""
Response Normalizer.

Shapes platform payloads into the envelopes each tool returns. Error
envelopes carry the same keys as success envelopes, with empty payload
fields and an ``error`` message.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..utils.time_utils import format_time, parse_timestamp


def first_present(data: Optional[Mapping[str, Any]], keys: Sequence[str], default: Any = None) -> Any:
    """Return the first truthy value of ``keys`` in ``data``, else ``default``."""
    for key in keys:
        value = (data or {}).get(key)
        if value:
            return value
    return default


SUMMARY_TITLE_FALLBACK = ("title", "filename")
SUMMARY_TEXT_FALLBACK = ("summary",)


def resolve_title(data: Optional[Mapping[str, Any]]) -> str:
    return first_present(data, SUMMARY_TITLE_FALLBACK, "Untitled")


def resolve_summary(data: Optional[Mapping[str, Any]]) -> str:
    return first_present(data, SUMMARY_TEXT_FALLBACK, "No summary available")


# Description


def description_envelope(description: str, page: int, total_pages: int, error: Optional[str] = None) -> Dict[str, Any]:
    doc = {"description": description or "", "page": page, "total_pages": total_pages}
    if error:
        doc["error"] = error
    return doc


def description_error(page: int, error: str) -> Dict[str, Any]:
    return description_envelope("", page, 0, error=error)


# Entities


def entity_envelope(
    video_level_entities: Optional[Mapping[str, Any]],
    segment_entities: Optional[Iterable[Any]],
    page: int,
    total_pages: int,
    error: Optional[str] = None,
) -> Dict[str, Any]:
    doc = {
        "video_level_entities": dict(video_level_entities or {}),
        "segment_level_entities": {
            "entities": list(segment_entities or []),
            "page": page,
            "total_pages": total_pages,
        },
    }
    if error:
        doc["error"] = error
    return doc


def entity_error(page: int, error: str) -> Dict[str, Any]:
    return entity_envelope({}, [], page, 0, error=error)


def segment_entities_of(payload: Optional[Mapping[str, Any]]) -> List[Any]:
    """Segment entities of an extraction payload; anything but a list reads as empty."""
    entities = (payload or {}).get("segment_entities")
    return entities if isinstance(entities, list) else []


# Segmentation


def map_segment(segment: Mapping[str, Any]) -> Dict[str, Any]:
    start = segment.get("start_time") or 0
    end = segment.get("end_time")
    mapped = {
        "start_time": start,
        "start_time_formatted": format_time(start),
    }
    if end is not None:
        mapped["end_time"] = end
        mapped["end_time_formatted"] = format_time(end)
        mapped["duration_seconds"] = end - start
    return mapped


def map_shot(segment: Mapping[str, Any]) -> Dict[str, Any]:
    mapped = map_segment(segment)
    # Keep end_time next to start_time in the rendered JSON.
    return {
        "start_time": mapped["start_time"],
        "end_time": mapped.get("end_time"),
        "start_time_formatted": mapped["start_time_formatted"],
        "end_time_formatted": mapped.get("end_time_formatted"),
        "duration_seconds": mapped.get("duration_seconds"),
    }


def map_chapter(segment: Mapping[str, Any], index: int) -> Dict[str, Any]:
    number = index + 1
    return {
        "chapter_number": number,
        **map_segment(segment),
        "description": segment.get("description") or f"Chapter {number}",
    }


def shots_envelope(url: str, segments: Sequence[Mapping[str, Any]], source: str) -> Dict[str, Any]:
    return {
        "url": url,
        "segments": [map_shot(segment) for segment in segments],
        "total_shots": len(segments),
        "source": source,
    }


def shots_error(url: str, error: str) -> Dict[str, Any]:
    return {"url": url, "error": error, "segments": [], "total_shots": 0, "source": None}


def chapters_envelope(url: str, segments: Sequence[Mapping[str, Any]], source: str, prompt: Optional[str] = None) -> Dict[str, Any]:
    doc = {
        "url": url,
        "chapters": [map_chapter(segment, index) for index, segment in enumerate(segments)],
        "total_chapters": len(segments),
        "source": source,
    }
    if prompt:
        doc["prompt"] = prompt
    return doc


def chapters_error(url: str, error: str) -> Dict[str, Any]:
    return {"url": url, "error": error, "chapters": [], "total_chapters": 0, "source": None}


# Lists


def list_envelope(items_key: str, items: List[Any], page: int, total_pages: int, error: Optional[str] = None, **echo) -> Dict[str, Any]:
    doc = {items_key: items, "page": page, "total_pages": total_pages}
    doc.update({key: value for key, value in echo.items() if value is not None})
    if error:
        doc["error"] = error
    return doc


def search_envelope(results_key: str, query: str, collection_id: str, results: Optional[List[Any]], error: Optional[str] = None) -> Dict[str, Any]:
    results = results or []
    doc = {
        "query": query,
        "collection_id": collection_id,
        results_key: results,
        "total_results": len(results),
    }
    if error:
        doc["error"] = error
    return doc


# Files


def video_info_summary(video_info: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if not video_info:
        return None
    return {
        "duration_seconds": video_info.get("duration_seconds"),
        "has_audio": video_info.get("has_audio"),
    }


def file_summary(file: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "filename": file.get("filename"),
        "uri": file.get("uri"),
        "id": file.get("id"),
        "created_at": file.get("created_at"),
        "metadata": file.get("metadata"),
        "video_info": video_info_summary(file.get("video_info")),
    }


def _whole_seconds_between(start: Any, end: Any) -> Optional[int]:
    if not isinstance(start, str) or not isinstance(end, str):
        return None
    started, finished = parse_timestamp(start), parse_timestamp(end)
    if started is None or finished is None:
        return None
    return int((finished - started).total_seconds() // 1)


def file_metadata(file: Mapping[str, Any], now: datetime) -> Dict[str, Any]:
    """Full technical metadata for a completed file. ``now`` drives ``file_age_days``."""
    video_info = file.get("video_info")
    created = parse_timestamp(file.get("created_at"))
    duration = (video_info or {}).get("duration_seconds")

    return {
        "file_id": file.get("id"),
        "filename": file.get("filename"),
        "uri": file.get("uri"),
        "status": file.get("status"),
        "created_at": file.get("created_at"),
        "updated_at": file.get("updated_at"),
        "file_size": file.get("file_size") or None,
        "mime_type": file.get("mime_type") or None,
        "metadata": file.get("metadata") or {},
        "video_info": {
            "duration_seconds": duration,
            "duration_formatted": format_time(duration) if duration else None,
            "has_audio": video_info.get("has_audio"),
            "width": video_info.get("width") or None,
            "height": video_info.get("height") or None,
            "fps": video_info.get("fps") or None,
            "bitrate": video_info.get("bitrate") or None,
            "codec": video_info.get("codec") or None,
        } if video_info else None,
        "processing_info": processing_info(file),
        "computed": {
            "file_age_days": int((now - created).total_seconds() // 86400) if created else None,
            "processing_duration_seconds": _whole_seconds_between(
                file.get("processing_started_at"), file.get("processing_completed_at")
            ),
        },
    }


def processing_info(file: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "upload_completed_at": file.get("upload_completed_at") or None,
        "processing_started_at": file.get("processing_started_at") or None,
        "processing_completed_at": file.get("processing_completed_at") or None,
    }


def incomplete_file_metadata(file_id: str, file: Mapping[str, Any]) -> Dict[str, Any]:
    status = file.get("status")
    return {
        "file_id": file_id,
        "status": status,
        "error": f"Video is in {status} status and metadata may be incomplete",
        "metadata": {
            "filename": file.get("filename") or None,
            "uri": file.get("uri") or None,
            "created_at": file.get("created_at") or None,
            "updated_at": file.get("updated_at") or None,
        },
        "video_info": None,
        "processing_info": processing_info(file),
        "computed": {"file_age_days": None, "processing_duration_seconds": None},
    }


def metadata_error(file_id: str, error: str) -> Dict[str, Any]:
    return {
        "file_id": file_id,
        "status": None,
        "error": error,
        "metadata": None,
        "video_info": None,
        "processing_info": None,
        "computed": None,
    }
