"""Unit tests for TF-IDF keyword suggestions."""

import math

import pytest

from conftest import make_job
from job_aggregator.nlp import STOP_WORDS
from job_aggregator.suggest import get_suggested_keywords, term_weights


def _jobs():
    return [
        make_job(id="1", title="Kubernetes Engineer", description="kubernetes clusters and kubernetes operators"),
        make_job(id="2", title="Kubernetes Admin", description="kubernetes helm charts"),
        make_job(id="3", title="Data Analyst", description="dashboards for the sales team"),
    ]


class TestGetSuggestedKeywords:
    def test_dominant_term_first(self):
        assert get_suggested_keywords(_jobs(), limit=3)[0] == "kubernetes"

    def test_respects_limit(self):
        assert len(get_suggested_keywords(_jobs(), limit=4)) == 4

    def test_excludes_stop_words_and_short_terms(self):
        terms = get_suggested_keywords(_jobs(), limit=50)
        assert all(len(t) > 2 for t in terms)
        assert not any(t in STOP_WORDS for t in terms)

    def test_deterministic(self):
        assert get_suggested_keywords(_jobs(), limit=5) == get_suggested_keywords(_jobs(), limit=5)

    def test_empty_inputs(self):
        assert get_suggested_keywords([], limit=5) == []
        assert get_suggested_keywords([make_job(title="", description="")], limit=5) == []

    def test_common_terms_discounted_by_unsmoothed_idf(self):
        # alpha: 10 hits in both docs, idf 1 + ln(2/3); beta: 7 hits in one doc, idf 1
        jobs = [
            make_job(id="1", title="", description=" ".join(["alpha"] * 5 + ["beta"] * 7)),
            make_job(id="2", title="", description=" ".join(["alpha"] * 5 + ["gamma"])),
        ]
        assert get_suggested_keywords(jobs, limit=2) == ["beta", "alpha"]


class TestTermWeights:
    def test_raw_counts_times_idf(self):
        weights = term_weights(["alpha alpha beta", "alpha gamma"])
        assert weights["alpha"] == pytest.approx(3 * (1 + math.log(2 / 3)))
        assert weights["beta"] == pytest.approx(1.0)

    def test_empty_documents(self):
        assert term_weights(["", "   "]) == {}
