"""Adzuna job search source connector.

Docs: https://developer.adzuna.com/

Adzuna paginates with integer pages (/search/1, /search/2, ...); one page
is enough here. Requires an app id and key; without them the connector
returns nothing and makes no request.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from .. import config
from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, format_salary_range, to_iso
from .base import JobSource


class AdzunaSource(JobSource):
    """Fetch one page of Adzuna search results and normalize them."""

    name = "adzuna"
    label = "Adzuna"
    default_limit = 50
    timeout_s = 15.0

    def __init__(
        self,
        app_id: Optional[str] = None,
        api_key: Optional[str] = None,
        country: str = "us",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.app_id = config.ADZUNA_APP_ID if app_id is None else app_id
        self.api_key = config.ADZUNA_API_KEY if api_key is None else api_key
        self.country = country

    def has_credentials(self) -> bool:
        return bool(self.app_id and self.api_key)

    def _base_url(self, page: int = 1) -> str:
        return f"https://api.adzuna.com/v1/api/jobs/{self.country}/search/{page}"

    def _to_job(self, j: Dict[str, Any]) -> Job:
        return Job(
            id=f"{self.name}_{j.get('id')}",
            title=(j.get("title") or "").strip(),
            company=(j.get("company") or {}).get("display_name") or "Company",
            location=(j.get("location") or {}).get("display_name") or "Various",
            description=clean_html(j.get("description"), DESCRIPTION_MAX_CHARS),
            url=j.get("redirect_url") or "",
            salary=format_salary_range(j.get("salary_min"), j.get("salary_max")),
            posted_date=to_iso(j.get("created")),
            source=self.label,
            category=(j.get("category") or {}).get("label") or "",
        )

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        params: Dict[str, Any] = {
            "app_id": self.app_id,
            "app_key": self.api_key,
            "what": keywords,
            "results_per_page": limit,
            "content-type": "application/json",
        }
        payload = self._get_json(client, self._base_url(), params=params)
        return [self._to_job(j) for j in payload.get("results") or [] if j.get("title")]
