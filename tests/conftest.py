"""Shared fixtures: a Job factory and an in-memory source."""

from typing import Callable, List, Optional

import httpx
import pytest

from job_aggregator.models import Job
from job_aggregator.sources.base import JobSource


def make_job(
    id: str = "test_1",
    title: str = "Software Engineer",
    company: str = "Acme",
    description: str = "",
    posted_date: Optional[str] = None,
    source: str = "Test",
    **extra,
) -> Job:
    return Job(
        id=id,
        title=title,
        company=company,
        description=description,
        posted_date=posted_date,
        source=source,
        **extra,
    )


class FakeSource(JobSource):
    """Connector returning canned jobs (or raising) without network I/O."""

    def __init__(self, name: str, jobs: Optional[List[Job]] = None, error: Optional[BaseException] = None, label: Optional[str] = None):
        super().__init__()
        self.name = name
        self.label = label or name
        self.default_limit = 50
        self._jobs = jobs or []
        self._error = error
        self.calls = 0

    def _fetch(self, client, keywords, limit):
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._jobs)


class ExplodingSource(FakeSource):
    """Raises from `fetch` itself, bypassing the connector's own guard."""

    def fetch(self, keywords, limit=None, cache=None):
        self.calls += 1
        raise RuntimeError("connector bug")


@pytest.fixture
def job_factory() -> Callable[..., Job]:
    return make_job


def json_transport(payload, status_code: int = 200, seen: Optional[list] = None) -> httpx.MockTransport:
    """MockTransport answering every request with the same JSON payload."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


def text_transport(body: str, status_code: int = 200, seen: Optional[list] = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, text=body)

    return httpx.MockTransport(handler)
