from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

# Statuses after which a job never changes again.
TERMINAL_JOB_STATUSES = frozenset({"completed", "failed", "not_applicable"})


class VideoPlatformProvider(ABC):
    """Abstract base class for the remote video-understanding platform.

    Every method maps to a single remote verb and returns the decoded JSON
    body. Job-style resources are addressed by name: ``describe``,
    ``extract`` or ``segments``.
    """

    @abstractmethod
    async def list_collections(self, limit: int, offset: int, collection_type: Optional[str] = None) -> Dict[str, Any]:
        """List collections, returning ``{"data": [...], "total": n}``."""
        pass

    @abstractmethod
    async def get_collection(self, collection_id: str) -> Dict[str, Any]:
        """Fetch a single collection."""
        pass

    @abstractmethod
    async def list_collection_videos(
        self,
        collection_id: str,
        limit: int,
        offset: int,
        status: Optional[str] = None,
        added_after: Optional[str] = None,
        added_before: Optional[str] = None,
    ) -> Dict[str, Any]:
        """List videos that belong to a collection."""
        pass

    @abstractmethod
    async def get_media_descriptions(
        self,
        collection_id: str,
        file_id: str,
        response_format: str = "markdown",
        start_time_seconds: Optional[float] = None,
        end_time_seconds: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Fetch the stored description of a file inside a media-descriptions collection."""
        pass

    @abstractmethod
    async def get_entities(self, collection_id: str, file_id: str, limit: int, offset: int) -> Dict[str, Any]:
        """Fetch the stored entities of a file inside an entities collection."""
        pass

    @abstractmethod
    async def list_rich_transcripts(self, collection_id: str, limit: int, offset: int) -> Dict[str, Any]:
        """List stored rich transcripts of a collection."""
        pass

    @abstractmethod
    async def list_media_descriptions(self, collection_id: str, limit: int, offset: int) -> Dict[str, Any]:
        """List stored media descriptions of a collection."""
        pass

    @abstractmethod
    async def list_files(
        self,
        limit: int,
        offset: int,
        status: Optional[str] = None,
        created_after: Optional[str] = None,
        created_before: Optional[str] = None,
    ) -> Dict[str, Any]:
        """List uploaded files."""
        pass

    @abstractmethod
    async def get_file(self, file_id: str) -> Dict[str, Any]:
        """Fetch a single file."""
        pass

    @abstractmethod
    async def list_jobs(self, resource: str, **filters) -> Dict[str, Any]:
        """List jobs of a resource kind, filtered by e.g. url, status, criteria and limit."""
        pass

    @abstractmethod
    async def get_job(self, resource: str, job_id: str, **params) -> Dict[str, Any]:
        """Fetch a job, optionally with paging or time-range parameters."""
        pass

    @abstractmethod
    async def create_job(self, resource: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Submit a new job."""
        pass

    @abstractmethod
    async def wait_for_ready(self, resource: str, job_id: str, **params) -> Dict[str, Any]:
        """Poll a job until it reaches one of TERMINAL_JOB_STATUSES."""
        pass

    @abstractmethod
    async def search_content(self, collections: List[str], query: str, limit: int, scope: str) -> Dict[str, Any]:
        """Semantic search across collections."""
        pass

    @abstractmethod
    async def close(self):
        """Release any resources held by the provider."""
        pass
