"""
execution/backend/get_backend.py

Builds the backend collaborator selected by LEARNHUB_BACKEND.
"""

from execution.backend.base import Backend
from execution.backend.local_backend import create_local_backend
from execution.config import BACKEND_SUPABASE, get_backend_kind


def get_backend(db_path: str | None = None) -> Backend:
    """Return a fresh Backend for one browser session.

    Args:
        db_path: SQLite file for the local backend; ignored for Supabase.

    Raises:
        ValueError: If the backend name is invalid or Supabase settings are missing.
    """
    if get_backend_kind() == BACKEND_SUPABASE:
        # Imported late so the local backend works without network settings.
        from execution.backend.supabase_backend import create_supabase_backend  # noqa: PLC0415

        return create_supabase_backend()
    return create_local_backend(db_path=db_path)
