"""We Work Remotely RSS source connector.

The main feed lists every category. Item titles use the form
"Company: Job Title"; the feed has no search, so we match keywords locally
against title and description.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

import feedparser
import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, matches_keywords, to_iso
from .base import JobSource


class WeWorkRemotelySource(JobSource):
    """Fetch the We Work Remotely feed and keep entries matching the keywords."""

    name = "wwr"
    label = "WeWorkRemotely"
    default_limit = 100
    timeout_s = 15.0
    feed_url = "https://weworkremotely.com/remote-jobs.rss"

    def headers(self) -> Dict[str, str]:
        headers = super().headers()
        headers["Accept"] = "application/rss+xml, application/xml, text/xml"
        return headers

    @staticmethod
    def _slug(link: str) -> Optional[str]:
        path = urlparse(link).path.rstrip("/")
        return path.rsplit("/", 1)[-1] or None

    @staticmethod
    def _split_title(raw_title: str) -> Tuple[str, str]:
        # "Company: Title"
        if ":" in raw_title:
            left, right = raw_title.split(":", 1)
            if left.strip() and right.strip():
                return left.strip(), right.strip()
        return "Company", raw_title

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        resp = client.get(self.feed_url)
        resp.raise_for_status()
        feed = feedparser.parse(resp.content)

        out: List[Job] = []
        for index, entry in enumerate(feed.entries):
            raw_title = (entry.get("title") or "").strip()
            description = entry.get("summary") or entry.get("description") or ""
            if not raw_title or not matches_keywords(keywords, raw_title, description):
                continue

            company, title = self._split_title(raw_title)
            link = entry.get("link") or entry.get("id") or ""

            out.append(
                Job(
                    id=f"{self.name}_{self._slug(link) or index}",
                    title=title,
                    company=company,
                    location="Remote Worldwide",
                    description=clean_html(description, DESCRIPTION_MAX_CHARS),
                    url=link,
                    salary="",
                    posted_date=to_iso(entry.get("published") or entry.get("updated")),
                    source=self.label,
                    category="Remote",
                )
            )
            if len(out) >= limit:
                break
        return out
