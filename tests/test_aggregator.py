"""Unit tests for the settle-all fan-out and the search facade."""

import json
import sys
import time
from datetime import datetime, timedelta, timezone
from unittest import mock

import httpx
import pytest

import run_search
from conftest import ExplodingSource, FakeSource, make_job
from job_aggregator.aggregator import JobAggregator, SearchValidationError
from job_aggregator.cache import FetchCache
from job_aggregator.models import SearchResult


def _days_ago(days: float) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()


class SlowSource(FakeSource):
    def _fetch(self, client, keywords, limit):
        time.sleep(0.2)
        return super()._fetch(client, keywords, limit)


@pytest.fixture
def aggregator():
    sources = [
        FakeSource(
            "alpha",
            [
                make_job(id="alpha_1", title="React Developer", company="Acme", description="React and Node.js",
                         posted_date=_days_ago(1)),
                make_job(id="alpha_2", title="Data Analyst", company="Initech", description="SQL dashboards",
                         posted_date=_days_ago(20)),
            ],
        ),
        FakeSource(
            "beta",
            [
                make_job(id="beta_1", title="React developer!", company="ACME", posted_date=_days_ago(2)),
                make_job(id="beta_2", title="Frontend Engineer", company="Globex", description="React, TypeScript"),
            ],
        ),
    ]
    return JobAggregator(sources=sources, cache=FetchCache(ttl_seconds=60))


class TestValidation:
    @pytest.mark.parametrize("keywords", ["", "   ", None])
    def test_blank_keywords_rejected_before_fetch(self, keywords):
        source = FakeSource("alpha", [make_job()])
        agg = JobAggregator(sources=[source])
        with pytest.raises(SearchValidationError):
            agg.aggregate_jobs(keywords)
        with pytest.raises(SearchValidationError):
            agg.search(keywords)
        assert source.calls == 0

    def test_unknown_sort_rejected(self, aggregator):
        with pytest.raises(SearchValidationError):
            aggregator.search("react", sort_by="salary")


class TestFetchAll:
    def test_partial_failure_returns_union_of_survivors(self):
        failures = [
            FakeSource("down_1", error=httpx.ConnectError("refused")),
            FakeSource("down_2", error=httpx.ReadTimeout("slow")),
            FakeSource("down_3", error=ValueError("bad json")),
            FakeSource("down_4", error=httpx.ConnectError("dns")),
            ExplodingSource("down_5"),
        ]
        healthy = [FakeSource(f"ok_{i}", [make_job(id=f"ok_{i}", title=f"Role {i}")]) for i in range(13)]
        agg = JobAggregator(sources=failures + healthy)

        jobs, stats = agg.fetch_all("python")

        assert [j.id for j in jobs] == [f"ok_{i}" for i in range(13)]
        assert len(stats) == 18
        assert all(stats[f"down_{i}"] == 0 for i in range(1, 6))
        assert all(stats[f"ok_{i}"] == 1 for i in range(13))

    def test_every_source_failing_gives_empty_result(self):
        agg = JobAggregator(sources=[ExplodingSource("x"), FakeSource("y", error=httpx.ConnectError("down"))])
        assert agg.aggregate_jobs("python") == []

    def test_registration_order_kept_when_first_source_is_slow(self):
        slow = SlowSource("slow", [make_job(id="slow_1", title="First")])
        fast = FakeSource("fast", [make_job(id="fast_1", title="Second")])
        jobs, _ = JobAggregator(sources=[slow, fast]).fetch_all("python")
        assert [j.id for j in jobs] == ["slow_1", "fast_1"]

    def test_duplicate_labels_fall_back_to_names(self):
        agg = JobAggregator(sources=[FakeSource("hn_who", label="HN-Hiring"), FakeSource("hn_hiring", label="HN-Hiring")])
        _, stats = agg.fetch_all("python")
        assert set(stats) == {"hn_who", "hn_hiring"}

    def test_no_sources(self):
        assert JobAggregator(sources=[]).fetch_all("python") == ([], {})


class TestListSources:
    def test_names_and_labels_in_registration_order(self):
        agg = JobAggregator(sources=[FakeSource("hn_who", label="HN-Hiring"), FakeSource("alpha")])
        assert agg.list_sources() == [("hn_who", "HN-Hiring"), ("alpha", "alpha")]

    def test_defaults_to_every_connector(self):
        sources = JobAggregator().list_sources()
        assert len(sources) == 18
        assert sources[0] == ("remotive", "Remotive")
        assert sources[-1] == ("arbeitnow_extra", "Arbeitnow-Extra")


class TestAggregateJobs:
    def test_dedupes_and_sorts_newest_first(self, aggregator):
        jobs = aggregator.aggregate_jobs("react")
        assert [j.id for j in jobs] == ["alpha_1", "alpha_2", "beta_2"]

    def test_ids_unique(self):
        source = FakeSource(
            "a",
            [make_job(id="a_1", title="One"), make_job(id="a_1", title="Two"), make_job(id="a_2", title="Three")],
        )
        jobs = JobAggregator(sources=[source]).aggregate_jobs("x")
        assert [j.id for j in jobs] == ["a_1", "a_2"]

    def test_date_filter_keeps_undated(self, aggregator):
        jobs = aggregator.aggregate_jobs("react", date_filter="7d")
        assert [j.id for j in jobs] == ["alpha_1", "beta_2"]

    def test_limit_truncates(self, aggregator):
        assert len(aggregator.aggregate_jobs("react", limit=2)) == 2
        assert aggregator.aggregate_jobs("react", limit=0) == []

    def test_records_stats(self, aggregator):
        aggregator.aggregate_jobs("react")
        assert aggregator.last_stats == {"alpha": 2, "beta": 2}


class TestCaching:
    def test_repeat_search_served_from_cache_until_cleared(self, aggregator):
        aggregator.aggregate_jobs("react")
        aggregator.aggregate_jobs("react")
        assert [s.calls for s in aggregator.sources] == [1, 1]

        aggregator.clear_cache()
        aggregator.aggregate_jobs("react")
        assert [s.calls for s in aggregator.sources] == [2, 2]

    def test_different_query_misses(self, aggregator):
        aggregator.aggregate_jobs("react")
        aggregator.aggregate_jobs("React")
        assert [s.calls for s in aggregator.sources] == [2, 2]


class TestSearch:
    def test_ranked_result(self, aggregator):
        result = aggregator.search("react developer")
        assert isinstance(result, SearchResult)
        assert result.total_jobs == len(result.jobs) == 3
        assert result.jobs[0].id == "alpha_1"
        scores = [j.relevance_score for j in result.jobs]
        assert scores == sorted(scores, reverse=True)
        assert result.source_stats == {"alpha": 2, "beta": 2}
        assert result.suggested_keywords

    def test_company_filter(self, aggregator):
        result = aggregator.search("react", company="globex, initech")
        assert {j.company for j in result.jobs} == {"Globex", "Initech"}

    def test_min_score(self, aggregator):
        result = aggregator.search("react developer", min_score=1)
        assert "alpha_2" not in [j.id for j in result.jobs]
        assert all(j.relevance_score >= 1 for j in result.jobs)

    def test_sort_by_company(self, aggregator):
        result = aggregator.search("react", sort_by="company")
        assert [j.company for j in result.jobs] == ["Acme", "Globex", "Initech"]

    def test_sort_by_date(self, aggregator):
        result = aggregator.search("react", sort_by="date")
        assert [j.id for j in result.jobs] == ["alpha_1", "alpha_2", "beta_2"]


class TestCli:
    def test_writes_result_file(self, tmp_path):
        out = tmp_path / "jobs.json"
        result = SearchResult(
            keywords="react",
            total_jobs=1,
            suggested_keywords=["frontend"],
            source_stats={"Remotive": 1},
            jobs=[make_job(id="remotive_1", skills=["react"], relevance_score=42.0)],
        )
        argv = ["run_search.py", "--keywords", "react", "--out", str(out)]
        with mock.patch.object(sys, "argv", argv), mock.patch.object(run_search, "JobAggregator") as agg_cls:
            agg_cls.return_value.search.return_value = result
            run_search.main()

        agg_cls.return_value.search.assert_called_once()
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["total_jobs"] == 1
        assert data["jobs"][0]["id"] == "remotive_1"
        assert data["top_skills"] == [{"skill": "react", "count": 1}]

    def test_blank_keywords_exit_nonzero(self, tmp_path):
        argv = ["run_search.py", "--keywords", "  ", "--out", str(tmp_path / "x.json")]
        with mock.patch.object(sys, "argv", argv), mock.patch.object(run_search, "JobAggregator") as agg_cls:
            agg_cls.return_value.search.side_effect = SearchValidationError("Keywords are required")
            with pytest.raises(SystemExit) as exc:
                run_search.main()
        assert "Keywords are required" in str(exc.value)
