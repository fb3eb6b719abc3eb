"""Hacker News source connectors, via the Algolia search API.

Docs: https://hn.algolia.com/api

Three views of HN hiring activity:
- `job` items (YC company postings)
- stories whose titles announce hiring
- recent stories and comments mentioning hiring plus the keywords
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..models import Job
from ..utils import clean_html, keyword_terms, to_iso
from .base import JobSource

ALGOLIA_URL = "https://hn.algolia.com/api/v1"


def _item_url(object_id: Any) -> str:
    return f"https://news.ycombinator.com/item?id={object_id}"


class HackerNewsJobsSource(JobSource):
    """Fetch Hacker News `job` items matching the keywords."""

    name = "hn"
    label = "HackerNews"
    default_limit = 50
    timeout_s = 15.0

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(
            client,
            f"{ALGOLIA_URL}/search_by_date",
            params={"query": keywords, "tags": "job", "hitsPerPage": min(limit, 100)},
        )
        out: List[Job] = []
        for hit in payload.get("hits") or []:
            if not (hit.get("title") or hit.get("story_text")):
                continue
            body = clean_html(hit.get("story_text") or hit.get("comment_text"), DESCRIPTION_MAX_CHARS)
            out.append(
                Job(
                    id=f"{self.name}_{hit.get('objectID')}",
                    title=hit.get("title") or f"Position at {hit.get('author')}",
                    company=hit.get("author") or "YC Company",
                    location="Various",
                    description=body[:1500],
                    url=_item_url(hit.get("objectID")),
                    salary="",
                    posted_date=to_iso(hit.get("created_at")),
                    source=self.label,
                    category="Startup",
                )
            )
        return out


class HackerNewsWhoIsHiringSource(JobSource):
    """Stories whose title reads like a hiring announcement."""

    name = "hn_who"
    label = "HN-Hiring"
    default_limit = 30
    timeout_s = 15.0
    title_markers = ("hiring", "job", "looking for")

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(
            client,
            f"{ALGOLIA_URL}/search",
            params={"query": f"{keywords} hiring", "tags": "story", "hitsPerPage": limit},
        )
        out: List[Job] = []
        for hit in payload.get("hits") or []:
            title = hit.get("title") or ""
            if not any(marker in title.lower() for marker in self.title_markers):
                continue
            out.append(
                Job(
                    id=f"ghjob_{hit.get('objectID')}",
                    title=title,
                    company=hit.get("author") or "Company",
                    location="Remote/Various",
                    description=title,
                    url=hit.get("url") or _item_url(hit.get("objectID")),
                    salary="",
                    posted_date=to_iso(hit.get("created_at")),
                    source=self.label,
                    category="Tech",
                )
            )
        return out


class HackerNewsHiringPostsSource(JobSource):
    """Recent stories and comments that mention hiring and any keyword."""

    name = "hn_hiring"
    label = "HN-Hiring"
    default_limit = 30
    timeout_s = 10.0
    markers = ("hiring", "job", "remote")

    def _keep(self, hit: Dict[str, Any], terms: List[str]) -> bool:
        text = (hit.get("title") or hit.get("comment_text") or "").lower()
        return any(m in text for m in self.markers) and any(t in text for t in terms)

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        payload = self._get_json(
            client,
            f"{ALGOLIA_URL}/search_by_date",
            params={"query": f"hiring {keywords}", "tags": "(story,comment)", "hitsPerPage": min(limit * 2, 100)},
        )
        terms = keyword_terms(keywords)
        out: List[Job] = []
        for hit in payload.get("hits") or []:
            if not self._keep(hit, terms):
                continue
            out.append(
                Job(
                    id=f"gh_{hit.get('objectID')}",
                    title=hit.get("title") or f"Hiring: {keywords}",
                    company=hit.get("author") or "Company",
                    location="Remote/Various",
                    description=clean_html(
                        hit.get("comment_text") or hit.get("story_text") or hit.get("title"), DESCRIPTION_MAX_CHARS
                    ),
                    url=hit.get("url") or _item_url(hit.get("objectID")),
                    salary="",
                    posted_date=to_iso(hit.get("created_at")),
                    source=self.label,
                    category="Tech",
                )
            )
            if len(out) >= limit:
                break
        return out
