"""Source connectors, one per upstream provider.

`default_sources()` returns the registered connectors in registration order;
the aggregator concatenates results in this order.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from .adzuna import AdzunaSource
from .arbeitnow import ArbeitnowRemoteSource, ArbeitnowSource
from .base import JobSource
from .hackernews import HackerNewsHiringPostsSource, HackerNewsJobsSource, HackerNewsWhoIsHiringSource
from .himalayas import HimalayasSource
from .jobicy import JobicyCategoriesSource, JobicySource
from .jobspresso import JobspressoSource
from .landingjobs import LandingJobsSource
from .reed import ReedSource
from .remoteok import RemoteOKSource, RemoteOKTagsSource
from .remotive import RemotiveCategoriesSource, RemotiveSource
from .themuse import TheMuseSource
from .weworkremotely import WeWorkRemotelySource


def default_sources(
    transport: Optional[httpx.BaseTransport] = None,
    reed_api_key: Optional[str] = None,
    adzuna_app_id: Optional[str] = None,
    adzuna_api_key: Optional[str] = None,
) -> List[JobSource]:
    """Build one instance of every connector; credentials default from config."""
    common: dict[str, Any] = {"transport": transport}
    return [
        RemotiveSource(**common),
        RemoteOKSource(**common),
        ArbeitnowSource(**common),
        JobicySource(**common),
        HimalayasSource(**common),
        WeWorkRemotelySource(**common),
        HackerNewsJobsSource(**common),
        TheMuseSource(**common),
        ReedSource(api_key=reed_api_key, **common),
        AdzunaSource(app_id=adzuna_app_id, api_key=adzuna_api_key, **common),
        LandingJobsSource(**common),
        JobspressoSource(**common),
        HackerNewsWhoIsHiringSource(**common),
        HackerNewsHiringPostsSource(**common),
        RemoteOKTagsSource(**common),
        JobicyCategoriesSource(**common),
        RemotiveCategoriesSource(**common),
        ArbeitnowRemoteSource(**common),
    ]


__all__ = [
    "AdzunaSource",
    "ArbeitnowRemoteSource",
    "ArbeitnowSource",
    "HackerNewsHiringPostsSource",
    "HackerNewsJobsSource",
    "HackerNewsWhoIsHiringSource",
    "HimalayasSource",
    "JobSource",
    "JobicyCategoriesSource",
    "JobicySource",
    "JobspressoSource",
    "LandingJobsSource",
    "ReedSource",
    "RemoteOKSource",
    "RemoteOKTagsSource",
    "RemotiveCategoriesSource",
    "RemotiveSource",
    "TheMuseSource",
    "WeWorkRemotelySource",
    "default_sources",
]
