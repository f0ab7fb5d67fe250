"""
execution/session/pages.py

Top-level page state as a small tagged union, plus the navigation rules
between pages. Pure functions only; no Streamlit, no backend calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from execution.backend.base import Principal

# Page names accepted by navigate().
SIGNUP = "signup"
LOGIN = "login"
HOME = "home"
COURSE_DETAIL = "course-detail"

# Extra render state returned by resolve_view() while the session resolves.
LOADING = "loading"


@dataclass(frozen=True)
class SignUpPage:
    name = SIGNUP


@dataclass(frozen=True)
class LoginPage:
    name = LOGIN


@dataclass(frozen=True)
class HomePage:
    name = HOME


@dataclass(frozen=True)
class CourseDetailPage:
    """Course detail always carries the course it shows."""

    course_id: str
    name = COURSE_DETAIL

    def __post_init__(self) -> None:
        if not isinstance(self.course_id, str) or not self.course_id.strip():
            raise ValueError("CourseDetailPage requires a non-empty course_id")


Page = Union[SignUpPage, LoginPage, HomePage, CourseDetailPage]

INITIAL_PAGE: Page = LoginPage()


def navigate(current: Page, target: str, course_id: str | None = None) -> Page:
    """Return the page after an explicit navigation request.

    A request for course-detail without a usable course_id is refused and
    the current page is returned unchanged. Unknown targets are refused the
    same way.

    Args:
        current:   The page currently shown.
        target:    One of SIGNUP, LOGIN, HOME, COURSE_DETAIL.
        course_id: Required when target is COURSE_DETAIL.
    """
    if target == SIGNUP:
        return SignUpPage()
    if target == LOGIN:
        return LoginPage()
    if target == HOME:
        return HomePage()
    if target == COURSE_DETAIL:
        if course_id is None or not str(course_id).strip():
            return current
        return CourseDetailPage(str(course_id))
    return current


def apply_session(page: Page, principal: Principal | None) -> Page:
    """Force navigation from session state.

    - No principal: protected pages (home, course detail) drop to login.
    - Principal present while on login or sign-up: go home.
    """
    if principal is None:
        if isinstance(page, (HomePage, CourseDetailPage)):
            return LoginPage()
        return page
    if isinstance(page, (LoginPage, SignUpPage)):
        return HomePage()
    return page


def resolve_view(page: Page, principal: Principal | None, loading: bool) -> str:
    """Return the name of the view to render for this page and session.

    Guard: home needs a principal; course detail needs a principal and a
    course id (guaranteed by CourseDetailPage). Anything else falls back to
    login, or to the loading indicator while the session is resolving.
    """
    if loading:
        return LOADING
    if isinstance(page, SignUpPage):
        return SIGNUP
    if principal is None:
        return LOGIN
    if isinstance(page, CourseDetailPage):
        return COURSE_DETAIL
    return HOME
