"""
tests/test_load_course_data.py

Unit tests for execution/course/load_course_data.py.

Covers:
    T1 — course, lessons in order_index order, and no progress yet
    T2 — unknown course id renders the "not found" dead end
    T3 — reads fail independently (partial success)
    T4 — button labels

Uses an isolated database (tmp/test_load_course_data.db).
"""

import os
import sys
import unittest
from pathlib import Path
from unittest import mock

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap — repo root must be importable from any test runner.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.backend.base import (                              # noqa: E402
    COURSES,
    LESSONS,
    USER_PROGRESS,
    Backend,
    DataError,
)
from execution.backend.local_backend import create_local_backend  # noqa: E402
from execution.course.load_course_data import (                   # noqa: E402
    CourseDetailState,
    completion_button_label,
    load_course_data,
)

TEST_DB_PATH = str(REPO_ROOT / "tmp" / "test_load_course_data.db")

EMAIL = "u1@example.com"
PASSWORD = "secret-pass"
COURSE = {"id": "c1", "title": "Course One", "description": "About c1",
          "instructor": "I. Structor", "duration": "2 weeks",
          "image_url": "https://example.com/c1.png", "created_at": "2026-01-01T00:00:00+00:00"}


class TestLoadCourseData(unittest.TestCase):

    def setUp(self):
        (REPO_ROOT / "tmp").mkdir(parents=True, exist_ok=True)
        self.backend = create_local_backend(db_path=TEST_DB_PATH)
        self.backend.identity.sign_up(EMAIL, PASSWORD)
        self.backend.identity.sign_in(EMAIL, PASSWORD)

        data = self.backend.data
        data.insert(COURSES, COURSE)
        # Inserted out of display order on purpose.
        data.insert(LESSONS, {"id": "l3", "course_id": "c1", "title": "Three", "order_index": 3})
        data.insert(LESSONS, {"id": "l1", "course_id": "c1", "title": "One", "order_index": 1})
        data.insert(LESSONS, {"id": "l2", "course_id": "c1", "title": "Two", "order_index": 2})

    def tearDown(self):
        if os.path.exists(TEST_DB_PATH):
            os.remove(TEST_DB_PATH)

    # ------------------------------------------------------------------
    # T1 — happy path
    # ------------------------------------------------------------------
    def test_course_with_three_ordered_lessons_and_no_progress(self):
        state = load_course_data(self.backend, "c1")

        self.assertFalse(state.loading)
        self.assertFalse(state.not_found)
        self.assertEqual(state.course["title"], "Course One")
        self.assertEqual([lesson["id"] for lesson in state.lessons], ["l1", "l2", "l3"])
        self.assertIsNone(state.progress)
        self.assertFalse(state.toggling)
        self.assertEqual(completion_button_label(state), "Mark as Completed")

    def test_non_contiguous_order_index(self):
        self.backend.data.insert(COURSES, {"id": "c2", "title": "Two", "created_at": "2026-01-02T00:00:00+00:00"})
        self.backend.data.insert(LESSONS, {"id": "x20", "course_id": "c2", "title": "B", "order_index": 20})
        self.backend.data.insert(LESSONS, {"id": "x5", "course_id": "c2", "title": "A", "order_index": 5})

        state = load_course_data(self.backend, "c2")
        self.assertEqual([lesson["id"] for lesson in state.lessons], ["x5", "x20"])

    def test_existing_progress_is_loaded(self):
        self.backend.data.insert(USER_PROGRESS, {"course_id": "c1", "completed": True,
                                                 "completed_at": "2026-02-01T00:00:00+00:00"})
        state = load_course_data(self.backend, "c1")

        self.assertTrue(state.completed)
        self.assertEqual(completion_button_label(state), "Mark as Incomplete")

    # ------------------------------------------------------------------
    # T2 — not found
    # ------------------------------------------------------------------
    def test_missing_course_is_not_found(self):
        state = load_course_data(self.backend, "missing-id")

        self.assertTrue(state.not_found)
        self.assertIsNone(state.course)
        self.assertEqual(state.lessons, [])
        self.assertIsNone(state.progress)

    # ------------------------------------------------------------------
    # T3 — partial success
    # ------------------------------------------------------------------
    def test_lesson_failure_still_renders_course(self):
        data = mock.MagicMock()
        data.select_one.side_effect = lambda collection, filters: (
            {"id": "c1", "title": "Course One"} if collection == COURSES else None
        )
        data.select.side_effect = DataError("lessons unavailable")
        backend = Backend(identity=mock.MagicMock(), data=data)

        with self.assertLogs("execution.course.load_course_data", level="ERROR"):
            state = load_course_data(backend, "c1")

        self.assertEqual(state.course["id"], "c1")
        self.assertEqual(state.lessons, [])
        self.assertIsNone(state.progress)
        self.assertFalse(state.not_found)

    def test_progress_failure_leaves_progress_unset(self):
        data = mock.MagicMock()

        def _select_one(collection, filters):
            if collection == USER_PROGRESS:
                raise DataError("Multiple rows returned")
            return {"id": "c1", "title": "Course One"}

        data.select_one.side_effect = _select_one
        data.select.return_value = []
        backend = Backend(identity=mock.MagicMock(), data=data)

        with self.assertLogs("execution.course.load_course_data", level="ERROR"):
            state = load_course_data(backend, "c1")

        self.assertIsNotNone(state.course)
        self.assertIsNone(state.progress)

    def test_reads_use_expected_filters_and_order(self):
        data = mock.MagicMock()
        data.select_one.return_value = None
        data.select.return_value = []
        backend = Backend(identity=mock.MagicMock(), data=data)

        load_course_data(backend, "c9")

        data.select_one.assert_any_call(COURSES, {"id": "c9"})
        data.select_one.assert_any_call(USER_PROGRESS, {"course_id": "c9"})
        _, kwargs = data.select.call_args
        self.assertEqual(data.select.call_args[0][:2], (LESSONS, {"course_id": "c9"}))
        self.assertEqual(kwargs["order"].column, "order_index")
        self.assertTrue(kwargs["order"].ascending)

    # ------------------------------------------------------------------
    # T4 — labels
    # ------------------------------------------------------------------
    def test_label_while_in_flight(self):
        state = CourseDetailState(course_id="c1", loading=False, toggling=True)
        self.assertEqual(completion_button_label(state), "Updating...")


if __name__ == "__main__":
    unittest.main()
