"""Reed UK jobs source connector.

Docs: https://www.reed.co.uk/developers/jobseeker

Requires an API key, sent as the basic-auth username with an empty password.
Without one the connector returns nothing and makes no request.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from .. import config
from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, format_salary_range, to_iso
from .base import JobSource


class ReedSource(JobSource):
    """Fetch jobs from the Reed search API and normalize them."""

    name = "reed"
    label = "Reed"
    default_limit = 50
    timeout_s = 10.0
    base_url = "https://www.reed.co.uk/api/1.0/search"

    def __init__(self, api_key: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.api_key = config.REED_API_KEY if api_key is None else api_key

    def has_credentials(self) -> bool:
        return bool(self.api_key)

    def _to_job(self, j: Dict[str, Any]) -> Job:
        return Job(
            id=f"{self.name}_{j.get('jobId')}",
            title=(j.get("jobTitle") or "").strip(),
            company=(j.get("employerName") or "").strip(),
            location=j.get("locationName") or "UK",
            description=clean_html(j.get("jobDescription"), DESCRIPTION_MAX_CHARS),
            url=j.get("jobUrl") or "",
            salary=format_salary_range(j.get("minimumSalary"), j.get("maximumSalary"), symbol="£", suffix=""),
            # Reed dates are dd/mm/yyyy
            posted_date=to_iso(j.get("date")),
            source=self.label,
            category="",
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(
            client,
            self.base_url,
            params={"keywords": keywords, "resultsToTake": limit},
            auth=(self.api_key, ""),
        )
        return [self._to_job(j) for j in payload.get("results") or [] if j.get("jobTitle")]
