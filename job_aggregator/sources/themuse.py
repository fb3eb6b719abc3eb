"""The Muse public jobs source connector.

Docs: https://www.themuse.com/developers/api/v2

The public endpoint has category filters but no text search; we take the
newest page and match keywords against name, contents and company.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, matches_keywords, to_iso
from .base import JobSource


class TheMuseSource(JobSource):
    """Fetch The Muse's newest jobs and keep those matching the keywords."""

    name = "muse"
    label = "TheMuse"
    default_limit = 50
    timeout_s = 15.0
    base_url = "https://www.themuse.com/api/public/jobs"

    def _to_job(self, j: Dict[str, Any]) -> Job:
        company = (j.get("company") or {}).get("name") or "Company"
        return Job(
            id=f"{self.name}_{j.get('id')}",
            title=(j.get("name") or "").strip(),
            company=company,
            location=", ".join(loc.get("name", "") for loc in j.get("locations") or []) or "Various",
            description=clean_html(j.get("contents"), DESCRIPTION_MAX_CHARS),
            url=(j.get("refs") or {}).get("landing_page") or f"https://www.themuse.com/jobs/{j.get('id')}",
            salary="",
            posted_date=to_iso(j.get("publication_date")),
            source=self.label,
            category=", ".join(c.get("name", "") for c in j.get("categories") or []),
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"page": 1, "descending": "true"})
        out: List[Job] = []
        for j in payload.get("results") or []:
            if not j.get("name"):
                continue
            company = (j.get("company") or {}).get("name")
            if not matches_keywords(keywords, j.get("name"), j.get("contents"), company):
                continue
            out.append(self._to_job(j))
            if len(out) >= limit:
                break
        return out
