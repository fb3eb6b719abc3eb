"""Landing.jobs EU tech jobs source connector.

The endpoint returns a bare JSON array of offers.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, to_iso
from .base import JobSource


class LandingJobsSource(JobSource):
    """Fetch offers from Landing.jobs and normalize them."""

    name = "landing"
    label = "LandingJobs"
    default_limit = 50
    timeout_s = 15.0
    base_url = "https://landing.jobs/api/v1/jobs"

    def _to_job(self, j: Dict[str, Any]) -> Job:
        salary = j.get("salary")
        return Job(
            id=f"{self.name}_{j.get('id') or j.get('slug')}",
            title=(j.get("title") or "").strip(),
            company=j.get("company_name") or (j.get("company") or {}).get("name") or "Company",
            location=j.get("city") or "Remote",
            description=clean_html(j.get("description"), DESCRIPTION_MAX_CHARS),
            url=j.get("url") or f"https://landing.jobs/job/{j.get('slug')}",
            salary=str(salary) if salary else "",
            posted_date=to_iso(j.get("published_at")),
            source=self.label,
            category=j.get("role_type") or "",
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"limit": limit, "q": keywords})
        if not isinstance(payload, list):
            raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
        return [self._to_job(j) for j in payload[:limit] if j.get("title")]
