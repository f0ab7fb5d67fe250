"""
execution/course/load_course_data.py

Data for the Course Detail page: the course, its lessons in display order,
and the signed-in user's progress record for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from execution.backend.base import COURSES, LESSONS, USER_PROGRESS, Backend, BackendError, Order

logger = logging.getLogger(__name__)


@dataclass
class CourseDetailState:
    """Local state of the course detail view."""

    course_id: str
    course: dict | None = None
    lessons: list[dict] = field(default_factory=list)
    progress: dict | None = None
    loading: bool = True
    toggling: bool = False

    @property
    def not_found(self) -> bool:
        """True once loading finished without a course row."""
        return not self.loading and self.course is None

    @property
    def completed(self) -> bool:
        return bool(self.progress) and self.progress.get("completed") is True


def load_course_data(backend: Backend, course_id: str) -> CourseDetailState:
    """Run the three course-detail reads and return the view state.

    The reads are independent. Each failure is logged and leaves its part of
    the state at the default, so a course can render with an empty lesson
    list. A missing course is a normal outcome (course=None), not an error.

    Args:
        backend:   Backend collaborator for this session.
        course_id: Course to load.
    """
    state = CourseDetailState(course_id=course_id)

    try:
        state.course = backend.data.select_one(COURSES, {"id": course_id})
    except BackendError:
        logger.exception("Error loading course %s", course_id)

    try:
        state.lessons = backend.data.select(
            LESSONS,
            {"course_id": course_id},
            order=Order("order_index", ascending=True),
        )
    except BackendError:
        logger.exception("Error loading lessons for course %s", course_id)

    try:
        state.progress = backend.data.select_one(USER_PROGRESS, {"course_id": course_id})
    except BackendError:
        logger.exception("Error loading progress for course %s", course_id)

    state.loading = False
    return state


def completion_button_label(state: CourseDetailState) -> str:
    """Label for the completion toggle in its current state."""
    if state.toggling:
        return "Updating..."
    if state.completed:
        return "Mark as Incomplete"
    return "Mark as Completed"
