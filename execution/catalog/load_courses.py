"""
execution/catalog/load_courses.py

Data for the Home (catalog) page: every course, oldest first, joined in
memory with the signed-in user's progress records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from execution.backend.base import COURSES, USER_PROGRESS, Backend, BackendError, Order

logger = logging.getLogger(__name__)


@dataclass
class CatalogState:
    """Local state of the catalog view."""

    courses: list[dict] = field(default_factory=list)
    progress: dict[str, dict] = field(default_factory=dict)  # course_id -> progress row
    loading: bool = True
    user_id: str | None = None  # principal the progress belongs to


def build_progress_map(rows: list[dict]) -> dict[str, dict]:
    """Index progress rows by course_id.

    Duplicate rows for one course are not expected; if they occur, the row
    returned last wins.
    """
    progress: dict[str, dict] = {}
    for row in rows:
        progress[row["course_id"]] = row
    return progress


def load_courses(
    backend: Backend,
    previous: CatalogState | None = None,
    user_id: str | None = None,
) -> CatalogState:
    """Run both catalog reads and return the new view state.

    The two reads fail independently: a failed read is logged and that part
    of the state keeps its previous value (empty on first load). A previous
    state loaded for a different principal is never carried over.

    Args:
        backend:  Backend collaborator for this session.
        previous: State from an earlier load, if any.
        user_id:  Id of the signed-in principal the load is for.

    Returns:
        A new CatalogState with loading=False.
    """
    if previous is not None and previous.user_id != user_id:
        previous = None

    state = CatalogState(
        user_id=user_id,
        courses=list(previous.courses) if previous else [],
        progress=dict(previous.progress) if previous else {},
    )

    try:
        state.courses = backend.data.select(COURSES, order=Order("created_at", ascending=True))
    except BackendError:
        logger.exception("Error loading courses")

    try:
        rows = backend.data.select(USER_PROGRESS)
        state.progress = build_progress_map(rows)
    except BackendError:
        logger.exception("Error loading progress")

    state.loading = False
    return state


def is_course_completed(state: CatalogState, course_id: str) -> bool:
    """True iff the course's progress record exists and has completed == True."""
    record = state.progress.get(course_id)
    return bool(record) and record.get("completed") is True
