"""Post-fetch recency filter, near-duplicate collapsing and date ordering."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from .models import Job

DATE_FILTER_DAYS = {
    "24h": 1,
    "3d": 3,
    "7d": 7,
    "14d": 14,
    "30d": 30,
}
DEFAULT_WINDOW_DAYS = 30

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def filter_by_date(jobs: Iterable[Job], date_filter: Optional[str], now: Optional[datetime] = None) -> List[Job]:
    """Keep jobs posted within the named window.

    Jobs with a missing or unparsable date are always kept. Unknown window
    names fall back to 30 days.
    """
    jobs = list(jobs)
    if not date_filter or date_filter == "all":
        return jobs

    days = DATE_FILTER_DAYS.get(date_filter, DEFAULT_WINDOW_DAYS)
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days)

    kept: List[Job] = []
    for job in jobs:
        posted = job.posted_at
        if posted is None or posted >= cutoff:
            kept.append(job)
    return kept


def dedup_key(job: Job) -> str:
    """Identity key: alphanumeric title (50 chars) + alphanumeric company (30 chars).

    Location, source and date are ignored, so distinct openings with a generic
    title at the same company collapse into one.
    """
    title = _NON_ALNUM_RE.sub("", (job.title or "").lower())[:50]
    company = _NON_ALNUM_RE.sub("", (job.company or "").lower())[:30]
    return f"{title}_{company}"


def dedupe_jobs(jobs: Iterable[Job]) -> List[Job]:
    """Drop near-duplicates; the first record seen for a key wins."""
    seen_keys = set()
    seen_ids = set()
    out: List[Job] = []
    for job in jobs:
        key = dedup_key(job)
        if key in seen_keys or job.id in seen_ids:
            continue
        seen_keys.add(key)
        seen_ids.add(job.id)
        out.append(job)
    return out


def sort_by_posted_date(jobs: Iterable[Job]) -> List[Job]:
    """Newest first; jobs without a usable date sort as the oldest."""
    return sorted(jobs, key=lambda j: j.posted_at or _EPOCH, reverse=True)
