from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .criteria import DEFAULT_SELF_HOSTNAMES

# Project-root .env for local dev; real environment variables win.
_HERE = Path(__file__).resolve()
_PROJECT_ROOT = _HERE.parents[1]
load_dotenv(_PROJECT_ROOT / ".env", override=False)


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def fetch_timeout_ms() -> int | None:
    """ANALYSIS_FETCH_TIMEOUT_MS, or None when unset or not a positive integer."""
    raw = os.getenv("ANALYSIS_FETCH_TIMEOUT_MS", "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def cors_allow_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOWED_ORIGIN", "").strip()
    if not raw:
        return ["*"]
    return _split_csv(raw) or ["*"]


def self_hostnames() -> frozenset[str]:
    raw = os.getenv("WCAG_SELF_HOSTNAMES", "").strip()
    if not raw:
        return DEFAULT_SELF_HOSTNAMES
    return frozenset(h.lower() for h in _split_csv(raw))


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
