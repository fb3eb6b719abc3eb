"""Keyword refinement suggestions from a ranked result set.

Each job's preprocessed "title description" is one document. A term's
weight in a document is its raw count times idf = 1 + ln(N / (1 + df)),
where N is the number of documents and df the number containing the term.
Weights are summed across documents and the heaviest terms become
suggestions. The idf is computed on this result set only.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer

from .models import Job
from .nlp import STOP_WORDS, preprocess_text

TOKEN_PATTERN = r"(?u)\w+"
_TOKEN_RE = re.compile(TOKEN_PATTERN)


def _first_seen_order(documents: List[str]) -> Dict[str, int]:
    order: Dict[str, int] = {}
    for doc in documents:
        for term in _TOKEN_RE.findall(doc):
            order.setdefault(term, len(order))
    return order


def term_weights(documents: List[str]) -> Dict[str, float]:
    """Summed tf-idf weight of every term across `documents`."""
    vectorizer = CountVectorizer(lowercase=False, token_pattern=TOKEN_PATTERN)
    try:
        counts = vectorizer.fit_transform(documents)
    except ValueError:
        # every document was empty
        return {}

    n_docs = counts.shape[0]
    df = np.diff(counts.tocsc().indptr)
    idf = 1.0 + np.log(n_docs / (1.0 + df))
    totals = np.asarray(counts.sum(axis=0)).ravel()
    return dict(zip(vectorizer.get_feature_names_out(), totals * idf))


def get_suggested_keywords(jobs: Iterable[Job], limit: int = 5) -> List[str]:
    """Top `limit` salient terms; ties are broken by first appearance."""
    documents = [preprocess_text(f"{job.title} {job.description}") for job in jobs]
    if not documents or limit <= 0:
        return []

    weights = term_weights(documents)
    candidates = [
        term
        for term in _first_seen_order(documents)
        if len(term) > 2 and term not in STOP_WORDS and term in weights
    ]
    candidates.sort(key=lambda term: weights[term], reverse=True)
    return candidates[:limit]
