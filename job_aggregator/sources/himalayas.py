"""Himalayas remote jobs source connector.

Docs: https://himalayas.app/api

Supports server-side search via `q`. `pubDate` is an epoch timestamp.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, format_salary_range, to_iso
from .base import JobSource


class HimalayasSource(JobSource):
    """Fetch jobs from Himalayas' search endpoint and normalize them."""

    name = "himalayas"
    label = "Himalayas"
    default_limit = 50
    timeout_s = 15.0
    base_url = "https://himalayas.app/jobs/api"

    def _to_job(self, j: Dict[str, Any]) -> Job:
        job_id = j.get("id") or j.get("guid")
        return Job(
            id=f"{self.name}_{job_id}",
            title=(j.get("title") or "").strip(),
            company=(j.get("companyName") or "").strip(),
            location=", ".join(j.get("locationRestrictions") or []) or "Remote",
            description=clean_html(j.get("description"), DESCRIPTION_MAX_CHARS),
            url=j.get("applicationLink") or f"https://himalayas.app/jobs/{job_id}",
            salary=format_salary_range(j.get("minSalary"), j.get("maxSalary")),
            posted_date=to_iso(j.get("pubDate") or j.get("postedAt")),
            source=self.label,
            category=", ".join(j.get("categories") or []),
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"limit": limit, "q": keywords})
        return [self._to_job(j) for j in payload.get("jobs") or [] if j.get("title")]
