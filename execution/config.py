"""
execution/config.py

Environment-driven settings for LearnHub.
Values are read from the process environment; a .env file at the repo root
is loaded first when present (existing environment variables win).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]

load_dotenv(REPO_ROOT / ".env")

BACKEND_LOCAL = "local"
BACKEND_SUPABASE = "supabase"
VALID_BACKENDS = frozenset({BACKEND_LOCAL, BACKEND_SUPABASE})


def get_backend_kind() -> str:
    """Return the configured backend name ("local" or "supabase").

    Raises:
        ValueError: If LEARNHUB_BACKEND names an unknown backend.
    """
    kind = os.environ.get("LEARNHUB_BACKEND", BACKEND_LOCAL).strip().lower() or BACKEND_LOCAL
    if kind not in VALID_BACKENDS:
        raise ValueError(f"Invalid LEARNHUB_BACKEND: {kind!r}")
    return kind


def get_db_path_override() -> str | None:
    """Return LEARNHUB_DB_PATH if set and non-blank, else None."""
    value = os.environ.get("LEARNHUB_DB_PATH", "").strip()
    return value or None


def get_supabase_settings() -> tuple[str, str]:
    """Return (url, anon_key) for the hosted Supabase project.

    Raises:
        ValueError: If either SUPABASE_URL or SUPABASE_ANON_KEY is missing.
    """
    url = os.environ.get("SUPABASE_URL", "").strip()
    key = os.environ.get("SUPABASE_ANON_KEY", "").strip()
    if not url or not key:
        raise ValueError("Supabase configuration missing: set SUPABASE_URL and SUPABASE_ANON_KEY.")
    return url, key


def get_log_level() -> str:
    """Return the configured log level name; defaults to INFO."""
    return os.environ.get("LEARNHUB_LOG_LEVEL", "INFO").strip().upper() or "INFO"
