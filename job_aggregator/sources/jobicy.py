"""Jobicy remote jobs source connectors.

Docs: https://jobicy.com/jobs-rss-feed

`tag` narrows results server-side but only matches Jobicy's own tags, so a
second connector takes the newest 100 listings and matches locally.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, format_salary_range, matches_keywords, to_iso
from .base import JobSource


class JobicySource(JobSource):
    """Fetch jobs from Jobicy by tag and normalize them."""

    name = "jobicy"
    label = "Jobicy"
    default_limit = 50
    timeout_s = 15.0
    base_url = "https://jobicy.com/api/v2/remote-jobs"

    def _to_job(self, j: Dict[str, Any]) -> Job:
        industry = j.get("jobIndustry") or ""
        if isinstance(industry, list):
            industry = ", ".join(industry)
        return Job(
            id=f"{self.name}_{j.get('id')}",
            title=(j.get("jobTitle") or "").strip(),
            company=(j.get("companyName") or "").strip(),
            location=j.get("jobGeo") or "Remote",
            description=clean_html(j.get("jobDescription"), DESCRIPTION_MAX_CHARS),
            url=j.get("url") or "",
            salary=format_salary_range(j.get("annualSalaryMin"), j.get("annualSalaryMax")),
            posted_date=to_iso(j.get("pubDate")),
            source=self.label,
            category=industry,
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"count": limit, "tag": keywords})
        return [self._to_job(j) for j in payload.get("jobs") or [] if j.get("jobTitle")]


class JobicyCategoriesSource(JobicySource):
    """Newest Jobicy listings across every industry, filtered locally."""

    name = "jobicy_extra"
    label = "Jobicy-Extra"
    timeout_s = 10.0
    page_size = 100

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"count": self.page_size})
        out: List[Job] = []
        for j in payload.get("jobs") or []:
            if not j.get("jobTitle"):
                continue
            industry = j.get("jobIndustry") or ""
            if isinstance(industry, list):
                industry = " ".join(industry)
            if not matches_keywords(keywords, j.get("jobTitle"), j.get("companyName"), j.get("jobDescription"), industry):
                continue
            out.append(self._to_job(j))
            if len(out) >= limit:
                break
        return out
