"""Shared fixtures: an in-memory video platform that records every call."""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from cloudglue_mcp.core.jobs import JobLifecycleDriver
from cloudglue_mcp.exceptions import ResourceNotFoundException
from cloudglue_mcp.providers.base import VideoPlatformProvider


def _page(items: List[Dict[str, Any]], limit: int, offset: int) -> Dict[str, Any]:
    return {"data": items[offset:offset + limit], "total": len(items)}


class FakeVideoProvider(VideoPlatformProvider):
    """Scriptable stand-in for the remote platform.

    Seed the dictionaries below, call the code under test and inspect
    ``calls`` (a list of ``(method, kwargs)``) afterwards.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.failures: Dict[str, Exception] = {}

        self.collections: Dict[str, Dict[str, Any]] = {}
        self.collection_videos: Dict[str, List[Dict[str, Any]]] = {}
        self.media_descriptions: Dict[tuple, Dict[str, Any]] = {}
        self.entities: Dict[tuple, Dict[str, Any]] = {}
        self.stored_descriptions: Dict[str, List[Dict[str, Any]]] = {}
        self.files: Dict[str, Dict[str, Any]] = {}
        self.jobs: Dict[str, Dict[str, Any]] = {}
        self.search_results: List[Dict[str, Any]] = []

        # Shape of the job a create_job call produces, keyed by resource.
        self.new_job_status = "completed"
        self.new_job_fields: Dict[str, Dict[str, Any]] = {}
        self.wait_delay: float = 0
        self._job_counter = 0

    # Helpers for tests

    def _record(self, method: str, **kwargs):
        self.calls.append((method, kwargs))
        if method in self.failures:
            raise self.failures[method]

    def calls_to(self, method: str) -> List[Dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == method]

    def add_job(self, resource: str, url: str, **fields) -> str:
        self._job_counter += 1
        job_id = fields.pop("job_id", f"{resource}-job-{self._job_counter}")
        self.jobs[job_id] = {"job_id": job_id, "resource": resource, "url": url, "status": "completed", **fields}
        return job_id

    @property
    def created_jobs(self) -> List[Dict[str, Any]]:
        return self.calls_to("create_job")

    # VideoPlatformProvider

    async def list_collections(self, limit, offset, collection_type=None):
        self._record("list_collections", limit=limit, offset=offset, collection_type=collection_type)
        items = [c for c in self.collections.values() if not collection_type or c.get("collection_type") == collection_type]
        return _page(items, limit, offset)

    async def get_collection(self, collection_id):
        self._record("get_collection", collection_id=collection_id)
        if collection_id not in self.collections:
            raise ResourceNotFoundException(f"collection {collection_id} not found")
        return dict(self.collections[collection_id])

    async def list_collection_videos(self, collection_id, limit, offset, status=None, added_after=None, added_before=None):
        self._record(
            "list_collection_videos",
            collection_id=collection_id, limit=limit, offset=offset,
            status=status, added_after=added_after, added_before=added_before,
        )
        videos = [v for v in self.collection_videos.get(collection_id, []) if not status or v.get("status") == status]
        return _page(videos, limit, offset)

    async def get_media_descriptions(self, collection_id, file_id, response_format="markdown", start_time_seconds=None, end_time_seconds=None):
        self._record(
            "get_media_descriptions",
            collection_id=collection_id, file_id=file_id, response_format=response_format,
            start_time_seconds=start_time_seconds, end_time_seconds=end_time_seconds,
        )
        stored = self.media_descriptions.get((collection_id, file_id))
        if stored is None:
            raise ResourceNotFoundException(f"no description for {file_id}")
        if start_time_seconds is not None:
            return {**stored, "content": f"description {start_time_seconds:g}-{end_time_seconds:g}"}
        return dict(stored)

    async def get_entities(self, collection_id, file_id, limit, offset):
        self._record("get_entities", collection_id=collection_id, file_id=file_id, limit=limit, offset=offset)
        stored = self.entities.get((collection_id, file_id))
        if stored is None:
            raise ResourceNotFoundException(f"no entities for {file_id}")
        response = dict(stored)
        segments = stored.get("segment_entities")
        if isinstance(segments, list):
            response["segment_entities"] = segments[offset:offset + limit]
            response["total"] = stored.get("total", len(segments))
        return response

    async def list_rich_transcripts(self, collection_id, limit, offset):
        self._record("list_rich_transcripts", collection_id=collection_id, limit=limit, offset=offset)
        return _page(self.stored_descriptions.get(collection_id, []), limit, offset)

    async def list_media_descriptions(self, collection_id, limit, offset):
        self._record("list_media_descriptions", collection_id=collection_id, limit=limit, offset=offset)
        return _page(self.stored_descriptions.get(collection_id, []), limit, offset)

    async def list_files(self, limit, offset, status=None, created_after=None, created_before=None):
        self._record(
            "list_files", limit=limit, offset=offset, status=status,
            created_after=created_after, created_before=created_before,
        )
        files = [f for f in self.files.values() if not status or f.get("status") == status]
        return _page(files, limit, offset)

    async def get_file(self, file_id):
        self._record("get_file", file_id=file_id)
        if file_id not in self.files:
            raise ResourceNotFoundException(f"file {file_id} not found")
        return dict(self.files[file_id])

    async def list_jobs(self, resource, **filters):
        self._record("list_jobs", resource=resource, **filters)
        matches = [
            job for job in reversed(list(self.jobs.values()))
            if job["resource"] == resource
            and job.get("url") == filters.get("url")
            and (not filters.get("status") or job.get("status") == filters["status"])
            and (not filters.get("criteria") or job.get("criteria") == filters["criteria"])
        ]
        summaries = [{k: v for k, v in job.items() if k not in ("data", "segments")} for job in matches]
        return {"data": summaries[:filters.get("limit", 50)], "total": len(summaries)}

    async def get_job(self, resource, job_id, **params):
        self._record("get_job", resource=resource, job_id=job_id, **params)
        job = dict(self.jobs[job_id])
        if params.get("start_time_seconds") is not None:
            job["data"] = {"content": f"description {params['start_time_seconds']:g}-{params['end_time_seconds']:g}"}
        elif "limit" in params and isinstance(job.get("data"), dict):
            data = dict(job["data"])
            segment_entities = data.get("segment_entities") or []
            data["segment_entities"] = segment_entities[params["offset"]:params["offset"] + params["limit"]]
            job["data"] = data
            job["total"] = len(segment_entities)
        return job

    async def create_job(self, resource, payload):
        self._record("create_job", resource=resource, payload=payload)
        fields = dict(self.new_job_fields.get(resource, {}))
        config = {k: v for k, v in payload.items() if k != "url"}
        if resource == "extract":
            fields.setdefault("extract_config", config)
        if resource == "segments":
            fields.setdefault("criteria", payload.get("criteria"))
            fields.setdefault("narrative_config", payload.get("narrative_config"))
        job_id = self.add_job(resource, payload["url"], status=self.new_job_status, **fields)
        return {"job_id": job_id, "status": "pending"}

    async def wait_for_ready(self, resource, job_id, **params):
        self._record("wait_for_ready", resource=resource, job_id=job_id, **params)
        if self.wait_delay:
            await asyncio.sleep(self.wait_delay)
        return dict(self.jobs[job_id])

    async def search_content(self, collections, query, limit, scope):
        self._record("search_content", collections=collections, query=query, limit=limit, scope=scope)
        return {"results": list(self.search_results)}

    async def close(self):
        pass


@pytest.fixture
def fake_provider() -> FakeVideoProvider:
    return FakeVideoProvider()


@pytest.fixture
def driver(fake_provider) -> JobLifecycleDriver:
    return JobLifecycleDriver(fake_provider, job_timeout=5)
