"""Utility helpers shared across the aggregator."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Iterable, List, Optional

from bs4 import BeautifulSoup

_WS_RE = re.compile(r"\s+")
_DMY_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def normalize_text(text: str) -> str:
    return _WS_RE.sub(" ", text or "").strip()


def clean_html(html: Optional[str], max_chars: int = 2000) -> str:
    """Strip markup, collapse whitespace and cap the length of a description."""
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return normalize_text(text)[:max_chars]


def keyword_terms(keywords: str) -> List[str]:
    return [k for k in (keywords or "").lower().split() if k]


def matches_keywords(keywords: str, *parts: Any) -> bool:
    """True when any whitespace-separated keyword occurs in the joined parts.

    Matching is a plain case-insensitive substring test, so "go" matches
    "google". Sources without server-side search use this to pre-filter.
    """
    blob = " ".join(str(p) for p in parts if p).lower()
    return any(k in blob for k in keyword_terms(keywords))


def format_salary_range(low: Any, high: Any, symbol: str = "$", suffix: str = "/yr") -> str:
    """Render a min/max pair as '$60,000 - $90,000/yr'; '' unless both are set."""
    if not low or not high:
        return ""
    try:
        return f"{symbol}{float(low):,.0f} - {symbol}{float(high):,.0f}{suffix}"
    except (TypeError, ValueError):
        return ""


def parse_posted_date(value: Any) -> Optional[datetime]:
    """Parse a provider timestamp into an aware UTC datetime.

    Handles ISO-8601 (with or without 'Z'), RFC 2822 (RSS pubDate), epoch
    seconds or milliseconds and dd/mm/yyyy. Returns None for anything else.
    """
    if value is None or isinstance(value, bool):
        return None

    dt: Optional[datetime] = None
    if isinstance(value, (int, float)):
        dt = _from_epoch(float(value))
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        if raw.isdigit():
            dt = _from_epoch(float(raw))
        else:
            dt = _from_string(raw)

    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _from_epoch(ts: float) -> Optional[datetime]:
    # Some providers send epoch in ms.
    if ts > 1e12:
        ts /= 1000.0
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _from_string(raw: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        pass
    try:
        return parsedate_to_datetime(raw)
    except (TypeError, ValueError, IndexError):
        pass
    match = _DMY_RE.match(raw)
    if match:
        day, month, year = (int(g) for g in match.groups())
        try:
            return datetime(year, month, day, tzinfo=timezone.utc)
        except ValueError:
            return None
    return None


def to_iso(value: Any) -> Optional[str]:
    """Normalize a provider timestamp to ISO-8601.

    Unparsable strings are returned as-is so downstream filters can keep them.
    """
    dt = parse_posted_date(value)
    if dt is not None:
        return dt.isoformat()
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def uniq_preserve_order(items: Iterable[str]) -> List[str]:
    """Deduplicate while preserving first-seen order."""
    seen = set()
    out: List[str] = []
    for it in items:
        if not it:
            continue
        key = it.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out
