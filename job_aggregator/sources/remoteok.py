"""RemoteOK jobs source connectors.

Docs: https://remoteok.com/api

The API returns a JSON array whose first element is a legal notice, not a
job. There is no free-text search, only a `tag` parameter, so one connector
filters the full feed locally and another queries the tags that overlap the
user's keywords.
"""

from __future__ import annotations

from typing import Any, Dict, List

import httpx

from ..config import DESCRIPTION_MAX_CHARS
from ..logger import get_logger
from ..models import Job
from ..utils import clean_html, format_salary_range, keyword_terms, matches_keywords, to_iso
from .base import PARSE_ERRORS, JobSource

logger = get_logger(__name__)


class RemoteOKSource(JobSource):
    """Fetch the RemoteOK feed and keep listings matching the keywords."""

    name = "remoteok"
    label = "RemoteOK"
    default_limit = 150
    timeout_s = 15.0
    base_url = "https://remoteok.com/api"
    fallback_location = "Remote Worldwide"

    def _to_job(self, j: Dict[str, Any], category: str) -> Job:
        return Job(
            id=f"{self.name}_{j.get('id')}",
            title=(j.get("position") or "").strip(),
            company=(j.get("company") or "").strip(),
            location=j.get("location") or self.fallback_location,
            description=clean_html(j.get("description"), DESCRIPTION_MAX_CHARS),
            url=j.get("url") or f"https://remoteok.com/remote-jobs/{j.get('id')}",
            salary=format_salary_range(j.get("salary_min"), j.get("salary_max")),
            posted_date=to_iso(j.get("date")),
            source=self.label,
            category=category,
        )

    @staticmethod
    def _listings(payload: Any) -> List[Dict[str, Any]]:
        if not isinstance(payload, list):
            raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
        return [j for j in payload[1:] if isinstance(j, dict)]

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        listings = self._listings(self._get_json(client, self.base_url))
        out: List[Job] = []
        for j in listings:
            if not j.get("position"):
                continue
            tags = j.get("tags") or []
            if not matches_keywords(keywords, j.get("position"), j.get("company"), j.get("description"), " ".join(tags)):
                continue
            out.append(self._to_job(j, ", ".join(tags[:2])))
            if len(out) >= limit:
                break
        return out


class RemoteOKTagsSource(RemoteOKSource):
    """Query RemoteOK by the broad tags that overlap the keywords."""

    name = "remoteok_tag"
    label = "RemoteOK-Tags"
    default_limit = 50
    timeout_s = 8.0
    fallback_location = "Remote"
    tags = ["developer", "engineer", "design", "marketing", "sales", "devops", "frontend", "backend", "fullstack"]
    max_tags = 2

    def matching_tags(self, keywords: str) -> List[str]:
        terms = keyword_terms(keywords)
        matched = [t for t in self.tags if any(t in k or k in t for k in terms)]
        return matched[: self.max_tags] or ["developer"]

    def _fetch(self, client: httpx.Client, keywords: str, limit: int) -> List[Job]:
        out: List[Job] = []
        started = self.clock()
        for tag in self.matching_tags(keywords):
            remaining = self._remaining(started)
            if remaining <= 0:
                logger.info("%s: time budget spent before tag %r", self.label, tag)
                break
            # One failing tag should not discard the others.
            try:
                listings = self._listings(self._get_json(client, self.base_url, params={"tag": tag}, timeout=remaining))
            except (httpx.HTTPError, *PARSE_ERRORS) as exc:
                logger.warning("%s: tag %r failed: %s", self.label, tag, exc)
                continue
            out.extend(self._to_job(j, tag) for j in listings if j.get("position"))
        return out[:limit]
