"""
Reuse Resolver.

Each content-producing tool runs the same decision procedure:

    CHECK_COLLECTION -> CHECK_PRIOR_JOB -> CREATE_NEW

A state either produces the tool's envelope or falls through to the next
one. Lookup misses and lookup failures both fall through; creating a new
job is the only state whose failures are reported to the caller.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional

from loguru import logger

from ..exceptions import (
    CloudglueMCPException,
    JobFailedException,
    JobTimeoutException,
    ValidationException,
)
from ..providers.base import VideoPlatformProvider
from ..utils.error_handler import describe_error
from . import normalizer
from .jobs import JobLifecycleDriver, default_job_config
from .lookup import Found, Miss, TransientError, LookupOutcome, run_lookup
from .models import AsyncJob, ContentReference, JobKind
from .pagination import PageWindow, compute_item_window, compute_time_window

SOURCE_EXISTING = "existing"
SOURCE_NEW = "new"


class ReuseResolver(ABC):
    """Base class for the per-tool reuse state machine."""

    kind: JobKind
    label: str = "result"

    def __init__(
        self,
        provider: VideoPlatformProvider,
        driver: JobLifecycleDriver,
        url: str,
        collection_id: Optional[str] = None,
        page: int = 0,
    ):
        self.provider = provider
        self.driver = driver
        self.url = url
        self.reference = ContentReference.parse(url)
        self.collection_id = collection_id
        self.page = page

    # Hooks

    def validate(self) -> None:
        """Raise ValidationException for usage errors. Runs before any remote call."""
        if self.collection_id and not self.reference.file_id:
            raise ValidationException(
                "collection_id requires a Cloudglue URL (cloudglue://files/file-id). "
                "Other URL formats are not supported for collection retrieval.",
                error_code="COLLECTION_REQUIRES_PLATFORM_URL",
            )

    async def check_collection(self) -> Any:
        return None

    def on_collection_unavailable(self, outcome: LookupOutcome) -> Optional[Dict[str, Any]]:
        """Envelope to return instead of falling through, or None to continue."""
        return None

    @abstractmethod
    async def check_prior_job(self) -> Any:
        ...

    def creation_config(self) -> Dict[str, Any]:
        return default_job_config(self.kind, self.reference)

    def wait_params(self) -> Dict[str, Any]:
        return {}

    @abstractmethod
    async def from_new_job(self, job: AsyncJob) -> Dict[str, Any]:
        ...

    @abstractmethod
    def error_envelope(self, message: str) -> Dict[str, Any]:
        ...

    # State machine

    async def resolve(self) -> Dict[str, Any]:
        tool = type(self).__name__
        try:
            self.validate()
        except ValidationException as e:
            logger.info(f"{tool}: usage error for {self.url}: {e}")
            return self.error_envelope(str(e))

        if self.collection_id:
            outcome = await run_lookup(f"{self.label} collection", self.check_collection)
            if isinstance(outcome, Found):
                logger.info(f"{tool}: served {self.url} from collection {self.collection_id}")
                return outcome.value
            blocked = self.on_collection_unavailable(outcome)
            if blocked is not None:
                return blocked

        outcome = await run_lookup(f"{self.label} prior job", self.check_prior_job)
        if isinstance(outcome, Found):
            logger.info(f"{tool}: reused an existing {self.label} job for {self.url}")
            return outcome.value

        return await self.create_new()

    async def create_new(self) -> Dict[str, Any]:
        try:
            config = self.creation_config()
            job = await self.driver.submit_and_await(self.kind, self.reference, config, **self.wait_params())
            result = await self.from_new_job(job)
        except ValidationException as e:
            return self.error_envelope(str(e))
        except (JobFailedException, JobTimeoutException) as e:
            logger.warning(f"{self.label} job for {self.url} did not complete: {e}")
            return self.error_envelope(
                f"Failed to create {self.label} - job did not complete successfully: {describe_error(e)}"
            )
        except CloudglueMCPException as e:
            logger.error(f"Error creating {self.label} for {self.url}: {e}")
            return self.error_envelope(f"Error creating {self.label}: {describe_error(e)}")

        logger.info(f"{type(self).__name__}: created a new {self.label} job for {self.url}")
        return result

    async def latest_completed_job(self, **filters) -> Optional[AsyncJob]:
        listing = await self.provider.list_jobs(
            self.kind.resource, url=self.url, status="completed", limit=1, **filters
        )
        jobs = (listing or {}).get("data") or []
        if not jobs:
            return None
        return AsyncJob.model_validate(jobs[0])


ContentLoader = Callable[[], Awaitable[str]]
RangeLoader = Callable[[float, float], Awaitable[str]]


class DescribeResolver(ReuseResolver):
    """Markdown descriptions paginated in five-minute windows."""

    kind = JobKind.DESCRIBE
    label = "description"

    def __init__(self, provider, driver, url, collection_id=None, page=0, start_time_seconds=0):
        super().__init__(provider, driver, url, collection_id=collection_id, page=page)
        self.start_time_seconds = start_time_seconds

    def window_for(self, duration_seconds: Optional[float]) -> PageWindow:
        return compute_time_window(self.page, self.start_time_seconds, duration_seconds)

    async def render(self, window: PageWindow, load_full: ContentLoader, load_range: RangeLoader) -> Dict[str, Any]:
        if window.is_empty:
            content = ""
        elif window.is_unbounded or window.covers_full_payload:
            content = await load_full()
        else:
            content = await load_range(window.start, window.end)
        return normalizer.description_envelope(content, self.page, window.total_pages)

    async def check_collection(self) -> Any:
        file_id = self.reference.file_id
        full = await self.provider.get_media_descriptions(self.collection_id, file_id, response_format="markdown")
        if full is None or full.get("content") is None:
            return Miss("no stored description for this file")

        async def load_full() -> str:
            return full.get("content") or ""

        async def load_range(start: float, end: float) -> str:
            ranged = await self.provider.get_media_descriptions(
                self.collection_id,
                file_id,
                response_format="markdown",
                start_time_seconds=start,
                end_time_seconds=end,
            )
            return (ranged or {}).get("content") or ""

        return await self.render(self.window_for(full.get("duration_seconds")), load_full, load_range)

    async def check_prior_job(self) -> Any:
        job = await self.latest_completed_job()
        if job is None:
            return None
        return await self.render(self.window_for(job.duration_seconds), *self.job_loaders(job.job_id))

    def job_loaders(self, job_id: str, full_content: Optional[str] = None):
        async def load_full() -> str:
            if full_content is not None:
                return full_content
            described = await self.provider.get_job(self.kind.resource, job_id, response_format="markdown")
            return AsyncJob.model_validate({"job_id": job_id, **(described or {})}).content

        async def load_range(start: float, end: float) -> str:
            described = await self.provider.get_job(
                self.kind.resource,
                job_id,
                response_format="markdown",
                start_time_seconds=start,
                end_time_seconds=end,
            )
            return AsyncJob.model_validate({"job_id": job_id, **(described or {})}).content

        return load_full, load_range

    def wait_params(self) -> Dict[str, Any]:
        return {"response_format": "markdown"}

    async def from_new_job(self, job: AsyncJob) -> Dict[str, Any]:
        return await self.render(self.window_for(job.duration_seconds), *self.job_loaders(job.job_id, job.content))

    def error_envelope(self, message: str) -> Dict[str, Any]:
        return normalizer.description_error(self.page, message)


class ExtractResolver(ReuseResolver):
    """Entity extraction; segment-level entities paginated 25 per page."""

    kind = JobKind.EXTRACT
    label = "entity extraction"

    def __init__(self, provider, driver, url, collection_id=None, page=0, prompt=None):
        super().__init__(provider, driver, url, collection_id=collection_id, page=page)
        self.prompt = prompt
        self.window = compute_item_window(page)

    def validate(self) -> None:
        if not self.collection_id and not self.prompt:
            raise ValidationException("Either 'collection_id' or 'prompt' must be provided", error_code="MISSING_INPUT")
        super().validate()

    def creation_config(self) -> Dict[str, Any]:
        return default_job_config(self.kind, self.reference, self.prompt)

    def page_envelope(self, entities: Optional[Dict[str, Any]], payload: Optional[Dict[str, Any]], total: Optional[int]) -> Dict[str, Any]:
        total_pages = compute_item_window(self.page, total or 0).total_pages
        return normalizer.entity_envelope(entities, normalizer.segment_entities_of(payload), self.page, total_pages)

    async def check_collection(self) -> Any:
        stored = await self.provider.get_entities(
            self.collection_id, self.reference.file_id, limit=self.window.limit, offset=self.window.offset
        )
        # An empty entity map still marks a stored artifact; pages past its end are empty, not missing.
        has_artifact = bool(stored) and (
            stored.get("entities") is not None
            or bool(stored.get("total"))
            or bool(normalizer.segment_entities_of(stored))
        )
        if not has_artifact:
            return Miss("no stored entities for this file")
        return self.page_envelope(stored.get("entities"), stored, stored.get("total"))

    def on_collection_unavailable(self, outcome: LookupOutcome) -> Optional[Dict[str, Any]]:
        if self.prompt:
            return None
        if isinstance(outcome, TransientError):
            return self.error_envelope(f"Error fetching entities from collection: {describe_error(outcome.error)}")
        return self.error_envelope(
            "No entities found for video in collection. The video may not have been processed yet "
            "or may not exist in the specified collection."
        )

    def matches_requested_config(self, extract_config: Optional[Dict[str, Any]]) -> bool:
        requested = self.creation_config()
        return all((extract_config or {}).get(key) == value for key, value in requested.items())

    async def check_prior_job(self) -> Any:
        job = await self.latest_completed_job()
        if job is None:
            return None
        if not self.matches_requested_config(job.extract_config):
            return Miss("latest extraction for this URL used a different prompt or configuration")
        return await self.page_of_job(job.job_id)

    async def page_of_job(self, job_id: str) -> Dict[str, Any]:
        extraction = await self.provider.get_job(
            self.kind.resource, job_id, limit=self.window.limit, offset=self.window.offset
        )
        extraction = extraction or {}
        payload = extraction.get("data") or {}
        return self.page_envelope(payload.get("entities"), payload, extraction.get("total"))

    async def from_new_job(self, job: AsyncJob) -> Dict[str, Any]:
        if not job.data:
            raise JobFailedException(f"extract job {job.job_id} completed without data")
        return await self.page_of_job(job.job_id)

    def error_envelope(self, message: str) -> Dict[str, Any]:
        return normalizer.entity_error(self.page, message)


class SegmentResolver(ReuseResolver):
    """Shared flow for shot and narrative segmentation."""

    def matches_requested_config(self, job: AsyncJob) -> bool:
        return True

    async def check_prior_job(self) -> Any:
        summary = await self.latest_completed_job(criteria=self.kind.criteria)
        if summary is None:
            return None
        full = await self.provider.get_job(self.kind.resource, summary.job_id)
        job = AsyncJob.model_validate({"job_id": summary.job_id, **(full or {})})
        if not job.segments:
            return Miss("latest segmentation job has no segments")
        if not self.matches_requested_config(job):
            return Miss("latest segmentation job used a different prompt")
        return self.envelope(job.segments, SOURCE_EXISTING)

    async def from_new_job(self, job: AsyncJob) -> Dict[str, Any]:
        if job.segments is None:
            raise JobFailedException(f"segmentation job {job.job_id} completed without segments")
        return self.envelope(job.segments, SOURCE_NEW)

    @abstractmethod
    def envelope(self, segments: List[Dict[str, Any]], source: str) -> Dict[str, Any]:
        ...


class ShotSegmentResolver(SegmentResolver):
    kind = JobKind.SEGMENT_SHOT
    label = "camera shot segmentation"

    def validate(self) -> None:
        # Rejects web-video-host references before anything is sent.
        default_job_config(self.kind, self.reference)
        super().validate()

    def envelope(self, segments, source):
        return normalizer.shots_envelope(self.url, segments, source)

    def error_envelope(self, message: str) -> Dict[str, Any]:
        return normalizer.shots_error(self.url, message)


class ChapterSegmentResolver(SegmentResolver):
    kind = JobKind.SEGMENT_NARRATIVE
    label = "chapter segmentation"

    def __init__(self, provider, driver, url, prompt=None):
        super().__init__(provider, driver, url)
        self.prompt = prompt

    def creation_config(self) -> Dict[str, Any]:
        return default_job_config(self.kind, self.reference, self.prompt)

    def matches_requested_config(self, job: AsyncJob) -> bool:
        previous_prompt = (job.narrative_config or {}).get("prompt") or None
        return previous_prompt == (self.prompt or None)

    def envelope(self, segments, source):
        return normalizer.chapters_envelope(self.url, segments, source, prompt=self.prompt)

    def error_envelope(self, message: str) -> Dict[str, Any]:
        return normalizer.chapters_error(self.url, message)
