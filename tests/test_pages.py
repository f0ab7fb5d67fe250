"""
tests/test_pages.py

Unit tests for execution/session/pages.py and execution/session/view_scope.py.
Pure functions; no database.
"""

import sys
import unittest
from pathlib import Path

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap — repo root must be importable from any test runner.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.backend.base import Principal           # noqa: E402
from execution.session.pages import (                  # noqa: E402
    COURSE_DETAIL,
    HOME,
    INITIAL_PAGE,
    LOADING,
    LOGIN,
    SIGNUP,
    CourseDetailPage,
    HomePage,
    LoginPage,
    SignUpPage,
    apply_session,
    navigate,
    resolve_view,
)
from execution.session.view_scope import ViewScope    # noqa: E402

USER = Principal(id="u1", email="u1@example.com")


class TestNavigate(unittest.TestCase):

    def test_initial_page_is_login(self):
        self.assertEqual(INITIAL_PAGE, LoginPage())

    def test_signup_and_login_links(self):
        self.assertEqual(navigate(LoginPage(), SIGNUP), SignUpPage())
        self.assertEqual(navigate(SignUpPage(), LOGIN), LoginPage())

    def test_home_to_course_detail_carries_course_id(self):
        page = navigate(HomePage(), COURSE_DETAIL, "c1")
        self.assertEqual(page, CourseDetailPage("c1"))
        self.assertEqual(page.course_id, "c1")

    def test_course_detail_without_id_is_refused(self):
        """A course-detail request with no course id leaves the page unchanged."""
        self.assertEqual(navigate(HomePage(), COURSE_DETAIL), HomePage())
        self.assertEqual(navigate(HomePage(), COURSE_DETAIL, ""), HomePage())
        self.assertEqual(navigate(HomePage(), COURSE_DETAIL, "   "), HomePage())

    def test_course_detail_back_to_home_and_logout(self):
        self.assertEqual(navigate(CourseDetailPage("c1"), HOME), HomePage())
        self.assertEqual(navigate(HomePage(), LOGIN), LoginPage())

    def test_unknown_target_is_refused(self):
        self.assertEqual(navigate(HomePage(), "settings"), HomePage())

    def test_course_detail_page_cannot_be_built_without_id(self):
        with self.assertRaises(ValueError):
            CourseDetailPage("")


class TestApplySession(unittest.TestCase):

    def test_no_principal_forces_login_from_protected_pages(self):
        self.assertEqual(apply_session(HomePage(), None), LoginPage())
        self.assertEqual(apply_session(CourseDetailPage("c1"), None), LoginPage())

    def test_no_principal_keeps_signup_page(self):
        self.assertEqual(apply_session(SignUpPage(), None), SignUpPage())

    def test_principal_on_login_goes_home(self):
        self.assertEqual(apply_session(LoginPage(), USER), HomePage())
        self.assertEqual(apply_session(SignUpPage(), USER), HomePage())

    def test_principal_keeps_current_protected_page(self):
        self.assertEqual(apply_session(CourseDetailPage("c1"), USER), CourseDetailPage("c1"))


class TestResolveView(unittest.TestCase):

    def test_loading_shows_loading_indicator(self):
        self.assertEqual(resolve_view(HomePage(), USER, loading=True), LOADING)

    def test_home_requires_principal(self):
        self.assertEqual(resolve_view(HomePage(), USER, loading=False), HOME)
        self.assertEqual(resolve_view(HomePage(), None, loading=False), LOGIN)

    def test_course_detail_requires_principal(self):
        page = CourseDetailPage("c1")
        self.assertEqual(resolve_view(page, USER, loading=False), COURSE_DETAIL)
        self.assertEqual(resolve_view(page, None, loading=False), LOGIN)

    def test_signup_renders_without_principal(self):
        self.assertEqual(resolve_view(SignUpPage(), None, loading=False), SIGNUP)

    def test_login_with_principal_renders_home(self):
        self.assertEqual(resolve_view(LoginPage(), USER, loading=False), HOME)


class TestViewScope(unittest.TestCase):

    def test_new_mount_makes_old_token_stale(self):
        scope = ViewScope()
        first = scope.mount()
        self.assertTrue(scope.is_current(first))

        second = scope.mount()
        self.assertFalse(scope.is_current(first))
        self.assertTrue(scope.is_current(second))

    def test_unmount_makes_every_token_stale(self):
        scope = ViewScope()
        token = scope.mount()
        scope.unmount()
        self.assertFalse(scope.is_current(token))
        self.assertFalse(scope.is_current(None))


if __name__ == "__main__":
    unittest.main()
