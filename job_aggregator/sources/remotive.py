"""Remotive jobs source connectors.

Remotive provides a public JSON endpoint with a server-side `search`
parameter. Its search is narrow, so a second connector pulls a wider page
unfiltered and matches keywords locally.

Docs: https://remotive.com/api/remote-jobs
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, matches_keywords, to_iso
from .base import JobSource


class RemotiveSource(JobSource):
    """Fetch jobs from Remotive's search endpoint and normalize them."""

    name = "remotive"
    label = "Remotive"
    default_limit = 150
    timeout_s = 15.0
    base_url = "https://remotive.com/api/remote-jobs"

    @staticmethod
    def _extract_salary(payload: Dict[str, Any]) -> str:
        val = payload.get("salary")
        if isinstance(val, (int, float)):
            return str(val)
        if isinstance(val, str):
            return val.strip()
        return ""

    def _to_job(self, j: Dict[str, Any]) -> Job:
        return Job(
            id=f"{self.name}_{j.get('id')}",
            title=(j.get("title") or "").strip(),
            company=(j.get("company_name") or "").strip(),
            location=j.get("candidate_required_location") or "Worldwide",
            description=clean_html(j.get("description"), DESCRIPTION_MAX_CHARS),
            url=j.get("url") or "",
            salary=self._extract_salary(j),
            posted_date=to_iso(j.get("publication_date")),
            source=self.label,
            category=j.get("category") or "",
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"search": keywords, "limit": limit})
        jobs = payload.get("jobs") or []
        return [self._to_job(j) for j in jobs if j.get("title")]


class RemotiveCategoriesSource(RemotiveSource):
    """Pull Remotive's latest listings across all categories and filter locally."""

    name = "remotive_extra"
    label = "Remotive-Extra"
    default_limit = 100
    page_size = 200

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"limit": self.page_size})
        out: List[Job] = []
        for j in payload.get("jobs") or []:
            if not j.get("title"):
                continue
            if not matches_keywords(
                keywords, j.get("title"), j.get("company_name"), j.get("description"), j.get("category")
            ):
                continue
            out.append(self._to_job(j))
            if len(out) >= limit:
                break
        return out
