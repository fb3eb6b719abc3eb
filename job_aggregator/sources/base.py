"""Base classes for source connectors."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import httpx

from ..cache import FetchCache
from ..config import HTTP_TIMEOUT_SECONDS, USER_AGENT
from ..logger import get_logger
from ..models import Job

logger = get_logger(__name__)

# Payload shapes we did not expect surface as one of these while normalizing.
PARSE_ERRORS = (ValueError, KeyError, TypeError, AttributeError)


class JobSource(ABC):
    """Abstract base class for a job source connector.

    Subclasses implement `_fetch`, which may raise freely. `fetch` wraps it
    with the credential check, the cache and failure isolation, and never
    raises.

    `timeout_s` bounds each connect and read. Connectors that make several
    requests also treat it as a budget for the whole fetch: each request gets
    only what is left, and none is started once it is spent.
    """

    name: str
    label: str
    default_limit: int = 50
    timeout_s: float = HTTP_TIMEOUT_SECONDS
    clock = time.monotonic

    def __init__(
        self,
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if timeout_s is not None:
            self.timeout_s = timeout_s
        self._transport = transport

    def has_credentials(self) -> bool:
        return True

    def headers(self) -> Dict[str, str]:
        return {"User-Agent": USER_AGENT}

    def fetch(
        self,
        keywords: str,
        limit: Optional[int] = None,
        cache: Optional[FetchCache] = None,
    ) -> List[Job]:
        """Fetch and normalize jobs for `keywords`; empty on any failure."""
        if not self.has_credentials():
            logger.debug("%s: no credentials configured, skipping", self.label)
            return []

        if cache is not None:
            cached = cache.get(self.name, keywords)
            if cached is not None:
                return cached

        limit = self.default_limit if limit is None else limit
        try:
            with httpx.Client(
                timeout=self.timeout_s,
                follow_redirects=True,
                headers=self.headers(),
                transport=self._transport,
            ) as client:
                jobs = self._fetch(client, keywords, max(limit, 0))
        except httpx.HTTPError as exc:
            logger.warning("%s: request failed: %s", self.label, exc)
            return []
        except PARSE_ERRORS as exc:
            logger.warning("%s: unexpected payload: %s", self.label, exc)
            return []

        if cache is not None:
            cache.set(self.name, keywords, jobs)
        logger.info("%s: %d jobs", self.label, len(jobs))
        return jobs

    @staticmethod
    def _get_json(client: httpx.Client, url: str, **kwargs) -> object:
        resp = client.get(url, **kwargs)
        resp.raise_for_status()
        return resp.json()

    def _remaining(self, started: float) -> float:
        """Seconds left of the `timeout_s` budget for a fetch begun at `started`."""
        return self.timeout_s - (self.clock() - started)

    @abstractmethod
    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        """Query the provider and map its payload to `Job` records."""
        raise NotImplementedError
