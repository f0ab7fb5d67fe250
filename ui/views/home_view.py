"""
ui/views/home_view.py

Home page: the course catalog with completion badges, plus logout.
"""

import streamlit as st

from execution.auth.sign_out import sign_out
from execution.backend.base import Backend
from execution.catalog.load_courses import is_course_completed, load_courses
from execution.session.pages import COURSE_DETAIL
from execution.session.session_controller import SessionController
from ui.theme import completed_badge_html

_CARDS_PER_ROW = 3


def _catalog_state(controller: SessionController, backend: Backend):
    """Load on mount: reuse the cached state only for the current mount token."""
    token = controller.scope.current
    cached = st.session_state.get("catalog")
    if cached is not None and cached[0] == token:
        return cached[1]

    with st.spinner("Loading courses..."):
        principal = controller.state.principal
        state = load_courses(
            backend,
            previous=cached[1] if cached else None,
            user_id=principal.id if principal else None,
        )
    if controller.scope.is_current(token):
        st.session_state["catalog"] = (token, state)
    return state


def render_home(controller: SessionController, backend: Backend) -> None:
    col_title, col_logout = st.columns([5, 1])
    with col_title:
        st.title("Available Courses")
        st.caption("Explore our courses and track your learning progress.")
    with col_logout:
        if st.button("Logout", key="logout", width="stretch"):
            sign_out(backend)
            controller.clear_principal()
            st.session_state.pop("catalog", None)
            st.session_state.pop("course_detail", None)
            st.rerun()

    state = _catalog_state(controller, backend)

    if not state.courses:
        st.info("No courses available yet.")
        return

    for start in range(0, len(state.courses), _CARDS_PER_ROW):
        row = state.courses[start : start + _CARDS_PER_ROW]
        for col, course in zip(st.columns(_CARDS_PER_ROW), row):
            with col:
                with st.container(border=True):
                    if course.get("image_url"):
                        st.image(course["image_url"], width="stretch")
                    if is_course_completed(state, course["id"]):
                        st.markdown(completed_badge_html(), unsafe_allow_html=True)
                    st.subheader(course["title"])
                    st.write(course.get("description") or "")
                    st.caption(
                        f"👤 {course.get('instructor') or ''}"
                        f" · 🕒 {course.get('duration') or ''}"
                    )
                    if st.button("View Course", key=f"view_{course['id']}", width="stretch"):
                        controller.navigate(COURSE_DETAIL, course["id"])
                        st.rerun()
