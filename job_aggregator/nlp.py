"""Text preprocessing, tokenization and skill extraction.

This module contains the deterministic text pipeline shared by the ranker
and the keyword suggester:
- lowercase + punctuation strip + abbreviation expansion
- tokenization with stop-word removal and Porter stemming
- vocabulary-based skill extraction

Skill matching is a substring test on purpose. Short terms such as "r" or
"go" produce false positives; keep it that way unless the matching rules
change everywhere at once.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional

from nltk.stem.porter import PorterStemmer

from .utils import uniq_preserve_order

STOP_WORDS = frozenset(
    [
        "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
        "be", "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "must", "shall", "can", "need", "dare", "ought",
        "used", "it", "its", "this", "that", "these", "those", "i", "you", "he",
        "she", "we", "they", "what", "which", "who", "whom", "whose", "where",
        "when", "why", "how", "all", "each", "every", "both", "few", "more",
        "most", "other", "some", "such", "no", "nor", "not", "only", "own",
        "same", "so", "than", "too", "very", "just", "about", "above", "after",
        "again", "against", "am", "any", "because", "before", "being", "below",
        "between", "during", "further", "here", "into", "off", "once", "our",
        "out", "over", "then", "there", "through", "under", "until", "up", "while",
        "your", "his", "her", "my", "their", "also", "etc", "able", "nbsp",
    ]
)

# Applied in order; later entries see the output of earlier ones.
SYNONYMS = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "ml": "machine learning",
    "ai": "artificial intelligence",
    "dl": "deep learning",
    "fe": "frontend",
    "be": "backend",
    "fs": "fullstack",
    "db": "database",
    "sql": "database",
    "nosql": "database",
    "k8s": "kubernetes",
    "aws": "amazon web services",
    "gcp": "google cloud platform",
    "ci/cd": "continuous integration",
    "ux": "user experience",
    "ui": "user interface",
    "qa": "quality assurance",
    "swe": "software engineer",
    "sde": "software development engineer",
    "pm": "product manager",
    "devops": "development operations",
}

TECH_KEYWORDS = [
    "javascript", "typescript", "python", "java", "c++", "c#", "ruby", "go",
    "rust", "swift", "kotlin", "php", "scala", "r", "matlab", "perl",
    "react", "angular", "vue", "svelte", "next.js", "nuxt", "gatsby",
    "node.js", "express", "fastapi", "django", "flask", "spring", "rails",
    "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "ansible",
    "mongodb", "postgresql", "mysql", "redis", "elasticsearch", "graphql",
    "rest", "api", "microservices", "serverless", "ci/cd", "jenkins", "github",
    "git", "agile", "scrum", "jira", "confluence", "figma", "sketch",
    "machine learning", "deep learning", "tensorflow", "pytorch", "nlp",
    "computer vision", "data science", "data engineering", "spark", "hadoop",
    "tableau", "power bi", "sql", "nosql", "linux", "unix", "bash",
    "html", "css", "sass", "tailwind", "bootstrap", "material ui",
    "redux", "mobx", "webpack", "vite", "babel", "jest", "cypress",
    "selenium", "playwright", "puppeteer", "blockchain", "web3", "solidity",
]

_STRIP_RE = re.compile(r"[^\w\s+#.]")
_WS_RE = re.compile(r"\s+")
_TOKEN_SPLIT_RE = re.compile(r"\W+")

# Whole-word match where a dot inside a token (node.js) binds the token.
_SYNONYM_PATTERNS = [
    (re.compile(rf"(?<![\w.]){re.escape(abbr)}(?![\w+#]|\.\w)"), full) for abbr, full in SYNONYMS.items()
]

_STEMMER = PorterStemmer(mode=PorterStemmer.ORIGINAL_ALGORITHM)


def preprocess_text(text: Optional[str]) -> str:
    """Lowercase, strip punctuation except + # ., collapse spaces, expand abbreviations."""
    if not text:
        return ""
    processed = _STRIP_RE.sub(" ", text.lower())
    processed = _WS_RE.sub(" ", processed).strip()
    for pattern, full in _SYNONYM_PATTERNS:
        processed = pattern.sub(full, processed)
    return processed


def tokenize(text: str) -> List[str]:
    return [t for t in _TOKEN_SPLIT_RE.split(text) if t]


@lru_cache(maxsize=50_000)
def stem(token: str) -> str:
    return _STEMMER.stem(token)


def tokenize_and_stem(text: Optional[str]) -> List[str]:
    """Preprocess, tokenize, drop short and stop-word tokens, then stem."""
    tokens = tokenize(preprocess_text(text))
    return [stem(t) for t in tokens if len(t) > 1 and t not in STOP_WORDS]


def extract_skills(text: Optional[str]) -> List[str]:
    """Return vocabulary terms contained in the preprocessed text, in vocabulary order."""
    if not text:
        return []
    processed = preprocess_text(text)
    return uniq_preserve_order(kw for kw in TECH_KEYWORDS if kw in processed)
