"""
ui/views/course_detail_view.py

Course Detail page: course header, ordered lessons, and the completion
toggle. A course id with no matching course shows a "not found" dead end.
"""

import streamlit as st

from execution.backend.base import Backend
from execution.course.load_course_data import (
    CourseDetailState,
    completion_button_label,
    load_course_data,
)
from execution.course.toggle_completion import begin_toggle, finish_toggle
from execution.session.pages import HOME
from execution.session.session_controller import SessionController


def _detail_state(controller: SessionController, backend: Backend, course_id: str) -> CourseDetailState:
    """Load on mount or course change; results for a stale mount are dropped."""
    token = controller.scope.current
    cached = st.session_state.get("course_detail")
    if cached is not None and cached[0] == token and cached[1].course_id == course_id:
        return cached[1]

    with st.spinner("Loading course..."):
        state = load_course_data(backend, course_id)
    if controller.scope.is_current(token):
        st.session_state["course_detail"] = (token, state)
    return state


def _go_home(controller: SessionController) -> None:
    controller.navigate(HOME)
    st.session_state.pop("catalog", None)  # pick up toggles made on this page
    st.rerun()


def render_course_detail(controller: SessionController, backend: Backend, course_id: str) -> None:
    state = _detail_state(controller, backend, course_id)

    if state.not_found:
        st.markdown("### Course not found")
        if st.button("Go back to home", key="not_found_home"):
            _go_home(controller)
        return

    if st.button("← Back to Courses", key="back_home"):
        _go_home(controller)

    course = state.course
    with st.container(border=True):
        if course.get("image_url"):
            st.image(course["image_url"], width="stretch")
        st.title(course["title"])
        st.caption(f"👤 {course.get('instructor') or ''} · 🕒 {course.get('duration') or ''}")

        st.subheader("About this course")
        st.write(course.get("description") or "")

        col_head, col_count = st.columns([4, 1])
        col_head.subheader("Course Lessons")
        col_count.caption(f"{len(state.lessons)} lessons")

        if not state.lessons:
            st.info("📖 No lessons available yet")
        else:
            for position, lesson in enumerate(state.lessons, start=1):
                st.markdown(f"**○ Lesson {position}: {lesson['title']}**")
                st.caption(lesson.get("content") or "")

        st.divider()

        # The click callback claims the toggle before this run renders, so the
        # button is already disabled while the write below is in flight.
        st.button(
            completion_button_label(state),
            key="toggle_completion",
            type="primary",
            disabled=state.toggling,
            on_click=begin_toggle,
            args=(state,),
            width="stretch",
        )
        if state.toggling:
            token = controller.scope.current
            with st.spinner("Updating..."):
                finish_toggle(
                    backend,
                    state,
                    is_current=lambda: controller.scope.is_current(token),
                )
            st.rerun()
