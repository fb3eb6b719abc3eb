"""Data models for the job aggregator.

Every upstream source is normalized into the same `Job` record regardless of
whether it speaks JSON, RSS or HTML. Records are rebuilt for every request;
nothing here is persisted.

This file uses Pydantic v2.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .utils import parse_posted_date


class Job(BaseModel):
    """A normalized job record.

    `skills` and `relevance_score` stay `None` until the record has been
    through the ranker.
    """

    id: str = Field(..., description="Source-namespaced ID, e.g. 'remotive_12345'.")
    title: str
    company: str
    location: str = "Remote"
    description: str = Field(default="", description="Plain text, markup stripped, capped length.")
    url: str = ""
    salary: str = Field(default="", description="Compensation as free text, or '' when absent.")
    posted_date: Optional[str] = Field(
        default=None,
        description="Posting timestamp as provided (ISO-8601 when known); None when absent.",
    )
    source: str = Field(..., description="Provenance tag, e.g. 'Remotive'.")
    category: str = ""

    skills: Optional[List[str]] = None
    relevance_score: Optional[float] = Field(default=None, ge=0, le=100)

    @property
    def posted_at(self) -> Optional[datetime]:
        """Parsed posting time in UTC, or None when missing or unparsable."""
        return parse_posted_date(self.posted_date)


class SkillCount(BaseModel):
    skill: str
    count: int


class SearchResult(BaseModel):
    """Ranked result of one search request."""

    keywords: str
    total_jobs: int
    suggested_keywords: List[str] = Field(default_factory=list)
    source_stats: Dict[str, int] = Field(default_factory=dict)
    jobs: List[Job] = Field(default_factory=list)
