"""
Job Lifecycle Driver.

Submits one asynchronous platform job and waits, within a hard time bound,
for it to reach a terminal status. The polling cadence belongs to the
provider; this module only bounds it and interprets the outcome.
"""

import asyncio
from typing import Any, Dict, Optional

from loguru import logger

from ..exceptions import (
    JobFailedException,
    JobSubmissionException,
    JobTimeoutException,
    ProviderException,
    ValidationException,
)
from ..providers.base import VideoPlatformProvider
from .models import AsyncJob, ContentReference, JobKind


def default_job_config(kind: JobKind, reference: ContentReference, prompt: Optional[str] = None) -> Dict[str, Any]:
    """Fixed creation policy per job kind. Only ``prompt`` is caller controlled."""
    if kind is JobKind.DESCRIBE:
        return {
            "enable_summary": reference.is_web_video_host,
            "enable_speech": True,
            "enable_scene_text": reference.is_platform_native,
            "enable_visual_scene_description": reference.is_platform_native,
        }

    if kind is JobKind.EXTRACT:
        if not prompt:
            raise ValidationException("prompt is required when collection_id is not provided", error_code="MISSING_PROMPT")
        # Segment-level entities are read back page by page even though creation disables them.
        return {
            "prompt": prompt,
            "enable_video_level_entities": True,
            "enable_segment_level_entities": False,
        }

    if kind is JobKind.SEGMENT_SHOT:
        if reference.is_web_video_host:
            raise ValidationException(
                "YouTube URLs are not supported for camera shot segmentation. "
                "Please use Cloudglue URLs or direct HTTP video URLs instead.",
                error_code="UNSUPPORTED_REFERENCE",
            )
        return {"criteria": kind.criteria}

    narrative_config = {"prompt": prompt} if prompt else {}
    return {"criteria": kind.criteria, "narrative_config": narrative_config}


class JobLifecycleDriver:
    """Create a job and block until it completes, fails or times out."""

    def __init__(self, provider: VideoPlatformProvider, job_timeout: float = 600.0):
        self.provider = provider
        self.job_timeout = job_timeout

    async def submit(self, kind: JobKind, reference: ContentReference, config: Dict[str, Any]) -> str:
        payload = {"url": reference.url, **config}
        try:
            submitted = await self.provider.create_job(kind.resource, payload)
        except ProviderException as e:
            raise JobSubmissionException(
                f"Failed to submit {kind.value} job: {e}",
                error_code="JOB_SUBMISSION_FAILED",
                details=e.details,
            ) from e

        job_id = (submitted or {}).get("job_id")
        if not job_id:
            raise JobSubmissionException(f"Platform accepted {kind.value} job without returning a job_id")
        logger.info(f"Submitted {kind.value} job {job_id} for {reference.url}")
        return job_id

    async def await_job(self, kind: JobKind, job_id: str, **wait_params) -> AsyncJob:
        try:
            raw = await asyncio.wait_for(
                self.provider.wait_for_ready(kind.resource, job_id, **wait_params),
                timeout=self.job_timeout,
            )
        except asyncio.TimeoutError:
            raise JobTimeoutException(
                f"{kind.value} job {job_id} did not finish within {self.job_timeout:g}s",
                error_code="JOB_TIMEOUT",
                details={"job_id": job_id},
            )

        job = AsyncJob.model_validate({"job_id": job_id, **(raw or {})})
        if not job.is_completed:
            raise JobFailedException(
                f"{kind.value} job {job_id} ended with status '{job.status}'",
                error_code="JOB_NOT_COMPLETED",
                details={"job_id": job_id, "status": job.status},
            )
        logger.info(f"{kind.value} job {job_id} completed")
        return job

    async def submit_and_await(
        self,
        kind: JobKind,
        reference: ContentReference,
        config: Optional[Dict[str, Any]] = None,
        **wait_params,
    ) -> AsyncJob:
        if config is None:
            config = default_job_config(kind, reference)
        job_id = await self.submit(kind, reference, config)
        return await self.await_job(kind, job_id, **wait_params)
