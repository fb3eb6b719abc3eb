"""Arbeitnow jobs source connectors.

Docs: https://www.arbeitnow.com/api/job-board-api

The board API has no search parameter. We page through the newest listings,
normalize fields, and match keywords locally against title, description and
tags.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..logger import get_logger
from ..models import Job
from ..utils import clean_html, matches_keywords, to_iso
from .base import JobSource

logger = get_logger(__name__)


class ArbeitnowSource(JobSource):
    """Fetch jobs from Arbeitnow and normalize them."""

    name = "arbeitnow"
    label = "Arbeitnow"
    default_limit = 100
    timeout_s = 15.0
    base_url = "https://www.arbeitnow.com/api/job-board-api"
    max_pages = 2
    remote_only = False
    fallback_location = "Europe"

    def _location(self, j: Dict[str, Any]) -> str:
        if j.get("location"):
            return j["location"]
        return "Remote" if j.get("remote") and not self.remote_only else self.fallback_location

    def _to_job(self, j: Dict[str, Any]) -> Job:
        tags = j.get("tags") or []
        return Job(
            id=f"{self.name}_{j.get('slug')}",
            title=(j.get("title") or "").strip(),
            company=(j.get("company_name") or "").strip(),
            location=self._location(j),
            description=clean_html(j.get("description"), DESCRIPTION_MAX_CHARS),
            url=j.get("url") or "",
            salary="",
            posted_date=to_iso(j.get("created_at")),
            source=self.label,
            category=", ".join(tags[:2]),
        )

    def _keep(self, keywords: str, j: Dict[str, Any]) -> bool:
        if not j.get("title"):
            return False
        if self.remote_only and not j.get("remote"):
            return False
        return matches_keywords(
            keywords,
            j.get("title"),
            j.get("company_name") if self.remote_only else "",
            j.get("description"),
            " ".join(j.get("tags") or []),
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        out: List[Job] = []
        page = 1
        started = self.clock()
        while len(out) < limit and page <= self.max_pages:
            remaining = self._remaining(started)
            if remaining <= 0:
                logger.info("%s: time budget spent after %d pages", self.label, page - 1)
                break
            payload = self._get_json(client, self.base_url, params={"page": page}, timeout=remaining)
            jobs = payload.get("data") or []
            if not jobs:
                break

            for j in jobs:
                if not self._keep(keywords, j):
                    continue
                out.append(self._to_job(j))
                if len(out) >= limit:
                    break

            page += 1

        return out


class ArbeitnowRemoteSource(ArbeitnowSource):
    """Remote-only slice of Arbeitnow, also matching on company name."""

    name = "arbeitnow_extra"
    label = "Arbeitnow-Extra"
    default_limit = 50
    timeout_s = 10.0
    max_pages = 1
    remote_only = True
    fallback_location = "Remote Europe"
