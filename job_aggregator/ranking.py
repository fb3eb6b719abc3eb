"""Relevance ranking of jobs against free-text keywords.

The score blends three token signals (all tokens stemmed):

    jaccard    |user ∩ job| / |user ∪ job|                  weight 50
    tf bonus   sum over user tokens of min(0.05 * hits, 0.2) weight 30
    title      0.15 per user token found in the title        weight 20

rounded half-up to two decimals and capped at 100.
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Dict, Iterable, List

from .models import Job, SkillCount
from .nlp import extract_skills, tokenize_and_stem

NEUTRAL_SCORE = 50.0


def _round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def calculate_relevance_score(user_keywords: str, job: Job) -> float:
    """Score a job against the user's keywords, in [0, 100]."""
    user_tokens = tokenize_and_stem(user_keywords)
    job_text = " ".join([job.title, job.description, job.company, " ".join(job.skills or [])])
    job_tokens = tokenize_and_stem(job_text)

    if not user_tokens or not job_tokens:
        return 0.0

    user_set = set(user_tokens)
    job_set = set(job_tokens)
    jaccard = len(user_set & job_set) / len(user_set | job_set)

    job_counts = Counter(job_tokens)
    tf_bonus = sum(min(job_counts[token] * 0.05, 0.2) for token in user_tokens)

    title_tokens = set(tokenize_and_stem(job.title))
    title_bonus = sum(1 for token in user_tokens if token in title_tokens) * 0.15

    raw = jaccard * 50 + tf_bonus * 30 + title_bonus * 20
    return min(_round2(raw), 100.0)


def rank_jobs(jobs: Iterable[Job], user_keywords: str) -> List[Job]:
    """Annotate copies of `jobs` with skills and scores, best first.

    Blank keywords give every job the neutral score and keep the input order.
    Ties keep their input order.
    """
    if not user_keywords or not user_keywords.strip():
        return [
            job.model_copy(update={"relevance_score": NEUTRAL_SCORE, "skills": extract_skills(job.description)})
            for job in jobs
        ]

    ranked: List[Job] = []
    for job in jobs:
        with_skills = job.model_copy(update={"skills": extract_skills(job.description)})
        score = calculate_relevance_score(user_keywords, with_skills)
        ranked.append(with_skills.model_copy(update={"relevance_score": score}))

    ranked.sort(key=lambda j: j.relevance_score, reverse=True)
    return ranked


def extract_top_skills(jobs: Iterable[Job], limit: int = 10) -> List[SkillCount]:
    """Most frequent skills across jobs, most common first."""
    counts: Dict[str, int] = {}
    for job in jobs:
        skills = job.skills if job.skills is not None else extract_skills(job.description)
        for skill in skills:
            counts[skill] = counts.get(skill, 0) + 1

    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [SkillCount(skill=skill, count=count) for skill, count in ordered[: max(limit, 0)]]
