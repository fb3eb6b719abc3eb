"""Jobspresso source connector.

The WP Job Manager AJAX endpoint returns JSON whose `html` field holds the
rendered listing markup; we pull title, company and link out of it with
BeautifulSoup. Listings carry no description or date.
"""

from __future__ import annotations

from typing import List
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from ..models import Job
from ..utils import normalize_text
from .base import JobSource


class JobspressoSource(JobSource):
    """Scrape Jobspresso's listing markup into jobs."""

    name = "jobspresso"
    label = "Jobspresso"
    default_limit = 30
    timeout_s = 15.0
    base_url = "https://jobspresso.co/jm-ajax/get_listings/"

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(client, self.base_url, params={"search_keywords": keywords, "per_page": limit})
        html = payload.get("html")
        if not html:
            return []

        soup = BeautifulSoup(html, "html.parser")
        out: List[Job] = []
        for index, card in enumerate(soup.select("li.job_listing, .job_listing")):
            title_el = card.select_one(".job_listing-title, h3")
            company_el = card.select_one(".job_listing-company, .company")
            link_el = card.select_one("a")

            title = normalize_text(title_el.get_text()) if title_el else ""
            if not title:
                continue
            company = normalize_text(company_el.get_text()) if company_el else ""
            link = link_el.get("href") if link_el else ""
            slug = urlparse(link).path.rstrip("/").rsplit("/", 1)[-1] if link else ""

            out.append(
                Job(
                    id=f"{self.name}_{slug or index}",
                    title=title,
                    company=company or "Company",
                    location="Remote",
                    description=title,
                    url=link or "https://jobspresso.co",
                    salary="",
                    posted_date=None,
                    source=self.label,
                    category="",
                )
            )
            if len(out) >= limit:
                break
        return out
