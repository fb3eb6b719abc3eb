"""Job aggregator package.

The package is structured around one request pipeline:
- `models.py` defines the canonical schema every source is normalized into.
- `sources/` contains per-source connectors that fetch and normalize jobs.
- `cache.py` memoizes connector results per (source, query) for a TTL.
- `aggregator.py` fans out to every source and merges, filters and dedupes.
- `nlp.py`, `ranking.py` and `suggest.py` score results and suggest keywords.
"""

from .aggregator import JobAggregator, SearchValidationError
from .cache import FetchCache
from .models import Job, SearchResult, SkillCount
from .ranking import calculate_relevance_score, extract_top_skills, rank_jobs
from .suggest import get_suggested_keywords

__all__ = [
    "FetchCache",
    "Job",
    "JobAggregator",
    "SearchResult",
    "SearchValidationError",
    "SkillCount",
    "calculate_relevance_score",
    "extract_top_skills",
    "get_suggested_keywords",
    "rank_jobs",
]
