"""Concurrent fan-out over every source and the search pipeline built on it.

A search runs: fetch (all sources, settle-all) -> date filter -> dedup ->
sort by date -> truncate -> rank -> suggest. Only the injected fetch cache
outlives a request.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from .cache import FetchCache
from .config import DEFAULT_AGGREGATE_LIMIT
from .filters import DATE_FILTER_DAYS, dedupe_jobs, filter_by_date, sort_by_posted_date
from .logger import get_logger
from .models import Job, SearchResult
from .ranking import rank_jobs
from .sources import JobSource, default_sources
from .suggest import get_suggested_keywords

logger = get_logger(__name__)

DATE_FILTERS = ["all", *DATE_FILTER_DAYS]
SORT_OPTIONS = ("relevance", "date", "company")


class SearchValidationError(ValueError):
    """Raised when a search request is rejected before any source is queried."""


def _require_keywords(keywords: Optional[str]) -> str:
    if keywords is None or not str(keywords).strip():
        raise SearchValidationError("Keywords are required")
    return str(keywords)


class JobAggregator:
    """Fetch, merge and rank jobs from many sources.

    Args:
        sources: Connectors in registration order. Defaults to every built-in one.
        cache: Shared fetch cache. A fresh one is created when omitted.
    """

    def __init__(self, sources: Optional[Sequence[JobSource]] = None, cache: Optional[FetchCache] = None) -> None:
        self.sources: List[JobSource] = list(default_sources() if sources is None else sources)
        self.cache = FetchCache() if cache is None else cache
        self.last_stats: Dict[str, int] = {}

    def list_sources(self) -> List[Tuple[str, str]]:
        return [(s.name, s.label) for s in self.sources]

    def _stat_keys(self) -> List[str]:
        labels = [s.label for s in self.sources]
        return [s.label if labels.count(s.label) == 1 else s.name for s in self.sources]

    def fetch_all(self, keywords: str) -> Tuple[List[Job], Dict[str, int]]:
        """Query every source concurrently and wait for all of them.

        Results are concatenated in registration order. A source that still
        raises counts as zero and never affects the others.
        """
        if not self.sources:
            return [], {}

        with ThreadPoolExecutor(max_workers=len(self.sources), thread_name_prefix="source") as pool:
            futures: List[Future] = [
                pool.submit(source.fetch, keywords, source.default_limit, self.cache) for source in self.sources
            ]

        combined: List[Job] = []
        stats: Dict[str, int] = {}
        for key, source, future in zip(self._stat_keys(), self.sources, futures):
            try:
                jobs = future.result()
            except Exception:
                logger.exception("%s: fetch raised", source.label)
                jobs = []
            stats[key] = len(jobs)
            combined.extend(jobs)

        logger.info("Results: %s", stats)
        return combined, stats

    def aggregate_jobs(
        self,
        keywords: str,
        limit: int = DEFAULT_AGGREGATE_LIMIT,
        date_filter: str = "all",
    ) -> List[Job]:
        """Deduplicated, date-filtered jobs, newest first, at most `limit`."""
        keywords = _require_keywords(keywords)
        logger.info("Searching: %r | filter: %s", keywords, date_filter)

        jobs, self.last_stats = self.fetch_all(keywords)
        jobs = filter_by_date(jobs, date_filter)
        unique = sort_by_posted_date(dedupe_jobs(jobs))

        logger.info("Total unique: %d (after %s filter)", len(unique), date_filter)
        return unique[: max(limit, 0)]

    def search(
        self,
        keywords: str,
        limit: int = 100,
        date_filter: str = "all",
        sort_by: str = "relevance",
        company: Optional[str] = None,
        min_score: Optional[float] = None,
        suggestion_limit: int = 5,
    ) -> SearchResult:
        """Aggregate, rank, filter and attach keyword suggestions.

        `company` is a comma-separated list matched as case-insensitive
        substrings. `sort_by` is one of "relevance", "date" or "company".
        """
        keywords = _require_keywords(keywords)
        if sort_by not in SORT_OPTIONS:
            raise SearchValidationError(f"sort_by must be one of {', '.join(SORT_OPTIONS)}")

        jobs = rank_jobs(self.aggregate_jobs(keywords, limit=limit, date_filter=date_filter), keywords)

        if company:
            wanted = [c.strip().lower() for c in company.split(",") if c.strip()]
            jobs = [j for j in jobs if any(c in j.company.lower() for c in wanted)]
        if min_score is not None:
            jobs = [j for j in jobs if (j.relevance_score or 0) >= min_score]

        if sort_by == "date":
            jobs = sort_by_posted_date(jobs)
        elif sort_by == "company":
            jobs = sorted(jobs, key=lambda j: j.company.lower())

        return SearchResult(
            keywords=keywords,
            total_jobs=len(jobs),
            suggested_keywords=get_suggested_keywords(jobs, suggestion_limit),
            source_stats=dict(self.last_stats),
            jobs=jobs,
        )

    def clear_cache(self) -> None:
        """Drop every cached source result."""
        self.cache.clear()
        logger.info("Fetch cache cleared")
