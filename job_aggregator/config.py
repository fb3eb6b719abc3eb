"""Configuration loaded from environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()

# Fetch cache
CACHE_TTL_SECONDS: float = float(os.getenv("CACHE_TTL", "1800"))

# HTTP / fetch settings
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))
USER_AGENT: str = os.getenv(
    "JOB_AGGREGATOR_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

# Optional provider credentials; sources that need them return nothing without them.
ADZUNA_APP_ID: str = os.getenv("ADZUNA_APP_ID", "")
ADZUNA_API_KEY: str = os.getenv("ADZUNA_API_KEY", "")
REED_API_KEY: str = os.getenv("REED_API_KEY", "")

# Aggregation
DEFAULT_AGGREGATE_LIMIT: int = int(os.getenv("DEFAULT_AGGREGATE_LIMIT", "500"))
DESCRIPTION_MAX_CHARS: int = 2000

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
