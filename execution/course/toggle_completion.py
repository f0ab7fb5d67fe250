"""
execution/course/toggle_completion.py

Flips the signed-in user's completion flag for one course.

The first toggle inserts a progress row; later toggles update that row by
id. Local state is updated from the write itself and is not re-fetched, so
it can briefly differ from the backend if the backend accepted the request
but did not apply it. The next load reconciles.

A toggle runs in two phases: begin_toggle claims it (single flight) and
finish_toggle performs the write and releases the claim.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from execution.backend.base import USER_PROGRESS, Backend, BackendError
from execution.course.load_course_data import CourseDetailState

logger = logging.getLogger(__name__)


def _always_current() -> bool:
    return True


def begin_toggle(state: CourseDetailState) -> bool:
    """Claim the toggle for one write. Refused while another is in flight.

    The UI claims from the button's click callback, so the run that follows
    already renders the button disabled before the write starts.
    """
    if state.toggling:
        logger.info("Toggle already in flight for course %s; ignoring", state.course_id)
        return False
    state.toggling = True
    return True


def finish_toggle(
    backend: Backend,
    state: CourseDetailState,
    now: datetime | None = None,
    is_current: Callable[[], bool] = _always_current,
) -> bool:
    """Perform the write for a claimed toggle and update state in place.

    completed and completed_at are always written together: completed_at is
    the toggle time when completed becomes True, else None. The in-flight
    flag is cleared whatever the outcome.

    Args:
        backend:    Backend collaborator for this session.
        state:      Loaded course detail state; its progress must come from the
                    latest load so insert vs. update is chosen correctly.
        now:        Toggle time; defaults to the current UTC time.
        is_current: Returns False once the owning view is gone; the write's
                    result is then discarded instead of applied.

    Returns:
        True when the write succeeded, False when it failed or no one is
        signed in. State is unchanged on False (apart from toggling).
    """
    try:
        try:
            principal = backend.identity.get_current_user()
        except BackendError:
            logger.exception("Current-user lookup failed before toggle")
            principal = None
        if principal is None:
            logger.error("User not authenticated; completion toggle aborted")
            return False

        timestamp = (now or datetime.now(timezone.utc)).isoformat()

        if state.progress is None:
            record = {
                "user_id": principal.id,
                "course_id": state.course_id,
                "completed": True,
                "completed_at": timestamp,
            }
            try:
                inserted = backend.data.insert(USER_PROGRESS, record)
            except BackendError:
                logger.exception("Error creating progress for course %s", state.course_id)
                return False
            if is_current():
                state.progress = inserted
            return True

        completed = not state.progress.get("completed")
        patch = {
            "completed": completed,
            "completed_at": timestamp if completed else None,
        }
        try:
            backend.data.update(USER_PROGRESS, {"id": state.progress["id"]}, patch)
        except BackendError:
            logger.exception("Error updating progress %s", state.progress["id"])
            return False
        if is_current():
            state.progress = {**state.progress, **patch}
        return True
    finally:
        state.toggling = False


def toggle_completion(
    backend: Backend,
    state: CourseDetailState,
    now: datetime | None = None,
    is_current: Callable[[], bool] = _always_current,
) -> bool:
    """Claim and write in one call. Returns False if refused or failed."""
    if not begin_toggle(state):
        return False
    return finish_toggle(backend, state, now=now, is_current=is_current)
