"""Unit tests for relevance scoring, ranking and top skills."""

import pytest

from conftest import make_job
from job_aggregator.ranking import calculate_relevance_score, extract_top_skills, rank_jobs


class TestCalculateRelevanceScore:
    def test_exact_value(self):
        job = make_job(title="Python Developer", description="Python", company="Acme", skills=["python"])
        # jaccard 1/3 * 50 + tf 0.15 * 30 + title 0.15 * 20
        assert calculate_relevance_score("python", job) == 24.17

    def test_no_overlap_scores_zero(self):
        job = make_job(title="Sales Associate", description="Sell products", company="Shop")
        assert calculate_relevance_score("kubernetes", job) == 0

    def test_only_stop_words_scores_zero(self):
        job = make_job(title="Engineer", description="Build things")
        assert calculate_relevance_score("the and of", job) == 0

    @pytest.mark.parametrize(
        "keywords",
        ["react", "react " * 200, "a", "!!!", "senior react developer build apps acme", "python java go rust"],
    )
    def test_score_bounded(self, keywords):
        job = make_job(title="Senior React Developer", description="Build React apps " * 20, company="Acme")
        score = calculate_relevance_score(keywords, job)
        assert 0 <= score <= 100

    def test_repeated_keywords_cap_at_100(self):
        job = make_job(title="React", description="react", company="Acme")
        assert calculate_relevance_score("react " * 50, job) == 100


class TestRankJobs:
    def test_relevant_job_ranks_higher(self):
        sales = make_job(id="s", title="Sales Associate", description="Sell products")
        react = make_job(id="r", title="Senior React Developer", description="Build React apps")
        ranked = rank_jobs([sales, react], "react developer")
        assert [j.id for j in ranked] == ["r", "s"]
        assert ranked[0].relevance_score > ranked[1].relevance_score

    def test_blank_keywords_neutral_score_and_order_kept(self):
        jobs = [make_job(id=str(i), title=f"Role {i}", description="Docker and Python") for i in range(4)]
        ranked = rank_jobs(jobs, "   ")
        assert [j.id for j in ranked] == ["0", "1", "2", "3"]
        assert all(j.relevance_score == 50 for j in ranked)
        assert all("docker" in j.skills for j in ranked)

    def test_ties_keep_input_order(self):
        jobs = [make_job(id=str(i), title="Accountant", company=f"Firm {i}") for i in range(3)]
        ranked = rank_jobs(jobs, "kubernetes")
        assert [j.id for j in ranked] == ["0", "1", "2"]

    def test_inputs_not_mutated(self):
        job = make_job(title="React Developer", description="React")
        rank_jobs([job], "react")
        assert job.relevance_score is None
        assert job.skills is None

    def test_skills_attached(self):
        ranked = rank_jobs([make_job(description="Experience with React and Node.js")], "react")
        assert {"react", "node.js"} <= set(ranked[0].skills)


class TestExtractTopSkills:
    def test_counts_descending(self):
        jobs = [
            make_job(id="1", skills=["python", "docker"]),
            make_job(id="2", skills=["python"]),
            make_job(id="3", skills=["docker", "python", "aws"]),
        ]
        top = extract_top_skills(jobs, limit=2)
        assert [(s.skill, s.count) for s in top] == [("python", 3), ("docker", 2)]

    def test_extracts_when_not_ranked(self):
        top = extract_top_skills([make_job(description="Terraform on Azure")], limit=10)
        assert {s.skill for s in top} >= {"terraform", "azure"}
