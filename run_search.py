"""CLI entry point.

This script searches every source, ranks the results against the keywords,
and writes the ranked jobs, suggestions and top skills to a JSON file.

Examples:
    python run_search.py --keywords "react developer"
    python run_search.py --keywords "python" --date-filter 7d --limit 50 --out jobs.json
    python run_search.py --keywords "data engineer" --sort-by date --min-score 20

The output is a dict with the serialized search result plus top skills.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from job_aggregator.aggregator import DATE_FILTERS, SORT_OPTIONS, JobAggregator, SearchValidationError
from job_aggregator.ranking import extract_top_skills


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Search, deduplicate and rank jobs from many sources.")
    p.add_argument("--keywords", type=str, required=True, help="Free-text search keywords.")
    p.add_argument("--out", type=str, default="jobs.json", help="Output JSON file path.")
    p.add_argument("--limit", type=int, default=100, help="Max jobs kept after deduplication.")
    p.add_argument("--date-filter", type=str, default="all", choices=DATE_FILTERS, help="Recency window.")
    p.add_argument("--sort-by", type=str, default="relevance", choices=SORT_OPTIONS, help="Result ordering.")
    p.add_argument("--company", type=str, default=None, help="Comma-separated company name filter.")
    p.add_argument("--min-score", type=float, default=None, help="Drop jobs scoring below this.")
    p.add_argument("--suggestions", type=int, default=5, help="Number of suggested keywords.")
    p.add_argument("--top-skills", type=int, default=10, help="Number of top skills to report.")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    aggregator = JobAggregator()

    try:
        result = aggregator.search(
            args.keywords,
            limit=args.limit,
            date_filter=args.date_filter,
            sort_by=args.sort_by,
            company=args.company,
            min_score=args.min_score,
            suggestion_limit=args.suggestions,
        )
    except SearchValidationError as exc:
        raise SystemExit(f"error: {exc}")

    out_path = Path(args.out).expanduser().resolve()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    data = result.model_dump(mode="json")
    data["top_skills"] = [s.model_dump() for s in extract_top_skills(result.jobs, args.top_skills)]
    out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    print(f"Wrote {result.total_jobs} jobs to: {out_path}")
    if result.suggested_keywords:
        print(f"Try also: {', '.join(result.suggested_keywords)}")


if __name__ == "__main__":
    main()
