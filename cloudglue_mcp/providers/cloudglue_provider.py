import asyncio
from typing import Any, Dict, List, Optional

import aiohttp
from loguru import logger

from cloudglue_mcp.providers.base import VideoPlatformProvider, TERMINAL_JOB_STATUSES
from cloudglue_mcp.utils.error_handler import handle_exceptions, convert_exceptions
from cloudglue_mcp.exceptions import (
    ConfigurationException,
    JobTimeoutException,
    ProviderException,
    ResourceNotFoundException,
)

RETRYABLE_ERRORS = (aiohttp.ClientConnectionError, asyncio.TimeoutError)
TRANSPORT_ERRORS = {aiohttp.ClientError: ProviderException, asyncio.TimeoutError: ProviderException}


def _clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop unset query parameters and render booleans the way the API expects."""
    cleaned = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


class CloudglueProvider(VideoPlatformProvider):
    """Cloudglue REST API provider implementation."""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize the Cloudglue provider.

        Args:
            config: Configuration dictionary with:
                - api_key: Cloudglue API key (required)
                - base_url: API root, e.g. https://api.cloudglue.dev/v1
                - request_timeout: per-request timeout in seconds
                - poll_interval / max_poll_attempts: job polling policy
                - max_retries: attempts for idempotent GET requests
        """
        self.config = config
        if not self.config.get("api_key"):
            raise ConfigurationException(
                "Cloudglue API key is required. Set CLOUDGLUE_API_KEY or pass --api-key."
            )
        self.base_url = self.config.get("base_url", "https://api.cloudglue.dev/v1").rstrip("/")
        self.request_timeout = float(self.config.get("request_timeout", 60.0))
        self.poll_interval = float(self.config.get("poll_interval", 5.0))
        self.max_poll_attempts = int(self.config.get("max_poll_attempts", 36))
        self.max_retries = int(self.config.get("max_retries", 3))

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config['api_key']}",
            "Accept": "application/json",
        }

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        async with aiohttp.ClientSession(headers=self._headers(), timeout=timeout) as session:
            async with session.request(method, url, params=_clean_params(params), json=payload) as response:
                if response.status == 404:
                    raise ResourceNotFoundException(
                        f"{method} {path} returned 404",
                        error_code="NOT_FOUND",
                        details={"status": 404},
                    )
                if response.status >= 400:
                    body = await response.text()
                    raise ProviderException(
                        f"{method} {path} failed with status {response.status}: {body[:500]}",
                        error_code="HTTP_ERROR",
                        details={"status": response.status},
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ProviderException(f"{method} {path} returned a malformed body: {e}") from e

    @convert_exceptions(TRANSPORT_ERRORS)
    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        send = handle_exceptions(retries=self.max_retries, exceptions=RETRYABLE_ERRORS)(self._request)
        return await send("GET", path, params=params)

    @convert_exceptions(TRANSPORT_ERRORS)
    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", path, payload=payload)

    async def list_collections(self, limit: int, offset: int, collection_type: Optional[str] = None) -> Dict[str, Any]:
        return await self._get(
            "/collections",
            {"limit": limit, "offset": offset, "collection_type": collection_type},
        )

    async def get_collection(self, collection_id: str) -> Dict[str, Any]:
        return await self._get(f"/collections/{collection_id}")

    async def list_collection_videos(
        self,
        collection_id: str,
        limit: int,
        offset: int,
        status: Optional[str] = None,
        added_after: Optional[str] = None,
        added_before: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._get(
            f"/collections/{collection_id}/videos",
            {
                "limit": limit,
                "offset": offset,
                "status": status,
                "added_after": added_after,
                "added_before": added_before,
            },
        )

    async def get_media_descriptions(
        self,
        collection_id: str,
        file_id: str,
        response_format: str = "markdown",
        start_time_seconds: Optional[float] = None,
        end_time_seconds: Optional[float] = None,
    ) -> Dict[str, Any]:
        return await self._get(
            f"/collections/{collection_id}/videos/{file_id}/media-descriptions",
            {
                "response_format": response_format,
                "start_time_seconds": start_time_seconds,
                "end_time_seconds": end_time_seconds,
            },
        )

    async def get_entities(self, collection_id: str, file_id: str, limit: int, offset: int) -> Dict[str, Any]:
        return await self._get(
            f"/collections/{collection_id}/videos/{file_id}/entities",
            {"limit": limit, "offset": offset},
        )

    async def list_rich_transcripts(self, collection_id: str, limit: int, offset: int) -> Dict[str, Any]:
        return await self._get(
            f"/collections/{collection_id}/rich-transcripts",
            {"limit": limit, "offset": offset},
        )

    async def list_media_descriptions(self, collection_id: str, limit: int, offset: int) -> Dict[str, Any]:
        return await self._get(
            f"/collections/{collection_id}/media-descriptions",
            {"limit": limit, "offset": offset},
        )

    async def list_files(
        self,
        limit: int,
        offset: int,
        status: Optional[str] = None,
        created_after: Optional[str] = None,
        created_before: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self._get(
            "/files",
            {
                "limit": limit,
                "offset": offset,
                "status": status,
                "created_after": created_after,
                "created_before": created_before,
            },
        )

    async def get_file(self, file_id: str) -> Dict[str, Any]:
        return await self._get(f"/files/{file_id}")

    async def list_jobs(self, resource: str, **filters) -> Dict[str, Any]:
        return await self._get(f"/{resource}", filters)

    async def get_job(self, resource: str, job_id: str, **params) -> Dict[str, Any]:
        return await self._get(f"/{resource}/{job_id}", params)

    async def create_job(self, resource: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Submitting {resource} job for {payload.get('url')}")
        return await self._post(f"/{resource}", payload)

    async def wait_for_ready(self, resource: str, job_id: str, **params) -> Dict[str, Any]:
        for attempt in range(self.max_poll_attempts):
            job = await self.get_job(resource, job_id, **params)
            status = job.get("status")
            if status in TERMINAL_JOB_STATUSES:
                logger.info(f"{resource} job {job_id} finished with status '{status}' after {attempt + 1} polls")
                return job
            logger.debug(f"{resource} job {job_id} is '{status}', polling again in {self.poll_interval}s")
            await asyncio.sleep(self.poll_interval)

        raise JobTimeoutException(
            f"{resource} job {job_id} did not finish after {self.max_poll_attempts} polls",
            error_code="JOB_TIMEOUT",
            details={"job_id": job_id},
        )

    async def search_content(self, collections: List[str], query: str, limit: int, scope: str) -> Dict[str, Any]:
        return await self._post(
            "/search",
            {"collections": collections, "query": query, "limit": limit, "scope": scope},
        )

    async def close(self):
        # Sessions are opened per request; nothing is held between calls.
        pass
