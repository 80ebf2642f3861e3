import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

_PLATFORM_FILE_RE = re.compile(r"^cloudglue://files/(.+)$")
_WEB_VIDEO_HOSTS = ("youtube.com", "youtu.be")


class ReferenceScheme(str, Enum):
    """URI schemes a content reference can use."""
    PLATFORM = "cloudglue"
    WEB_VIDEO_HOST = "youtube"
    HTTP = "http"
    DROPBOX = "dropbox"
    GOOGLE_DRIVE = "gdrive"
    ZOOM = "zoom"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ContentReference:
    """A URI identifying a video, classified by scheme."""

    url: str
    scheme: ReferenceScheme
    identifier: Optional[str] = None

    @classmethod
    def parse(cls, url: str) -> "ContentReference":
        url = url.strip()
        match = _PLATFORM_FILE_RE.match(url)
        if match:
            return cls(url, ReferenceScheme.PLATFORM, match.group(1))
        if url.startswith("cloudglue://"):
            return cls(url, ReferenceScheme.PLATFORM)
        if any(host in url for host in _WEB_VIDEO_HOSTS):
            return cls(url, ReferenceScheme.WEB_VIDEO_HOST, url)
        if url.startswith("dropbox://") or "dropbox.com/" in url:
            return cls(url, ReferenceScheme.DROPBOX, url.split("://", 1)[1])
        if url.startswith("gdrive://file/"):
            return cls(url, ReferenceScheme.GOOGLE_DRIVE, url[len("gdrive://file/"):])
        if url.startswith("zoom://uuid/") or url.startswith("zoom://id/"):
            return cls(url, ReferenceScheme.ZOOM, url.split("/", 3)[3])
        if url.startswith("http://") or url.startswith("https://"):
            return cls(url, ReferenceScheme.HTTP, url)
        return cls(url, ReferenceScheme.UNKNOWN)

    @property
    def is_platform_native(self) -> bool:
        return self.scheme is ReferenceScheme.PLATFORM

    @property
    def is_web_video_host(self) -> bool:
        return self.scheme is ReferenceScheme.WEB_VIDEO_HOST

    @property
    def file_id(self) -> Optional[str]:
        """Platform file id, only for ``cloudglue://files/<id>`` references."""
        return self.identifier if self.is_platform_native else None


class CollectionType(str, Enum):
    ENTITIES = "entities"
    RICH_TRANSCRIPTS = "rich-transcripts"
    MEDIA_DESCRIPTIONS = "media-descriptions"


class CollectionHandle(BaseModel):
    """A collection id together with its declared type."""
    model_config = ConfigDict(extra="ignore")

    id: str
    collection_type: Optional[str] = None
    name: Optional[str] = None

    def is_type(self, *types: CollectionType) -> bool:
        return self.collection_type in {t.value for t in types}


class AsyncJob(BaseModel):
    """Read-only view of a remote job as returned by the platform."""
    model_config = ConfigDict(extra="allow")

    job_id: str
    status: str = "pending"
    duration_seconds: Optional[float] = None
    data: Optional[Dict[str, Any]] = None
    segments: Optional[List[Dict[str, Any]]] = None
    total: Optional[int] = None
    extract_config: Optional[Dict[str, Any]] = None
    narrative_config: Optional[Dict[str, Any]] = None

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def content(self) -> str:
        """Markdown content of a describe job, empty when absent."""
        return (self.data or {}).get("content") or ""


class SegmentCriteria(str, Enum):
    SHOT = "shot"
    NARRATIVE = "narrative"


class JobKind(str, Enum):
    """Kinds of remote work the Job Lifecycle Driver can create."""
    DESCRIBE = "describe"
    EXTRACT = "extract"
    SEGMENT_SHOT = "segment-shot"
    SEGMENT_NARRATIVE = "segment-narrative"

    @property
    def resource(self) -> str:
        if self in (JobKind.SEGMENT_SHOT, JobKind.SEGMENT_NARRATIVE):
            return "segments"
        return self.value

    @property
    def criteria(self) -> Optional[str]:
        if self is JobKind.SEGMENT_SHOT:
            return SegmentCriteria.SHOT.value
        if self is JobKind.SEGMENT_NARRATIVE:
            return SegmentCriteria.NARRATIVE.value
        return None
