"""
ui/views/login_view.py

Login page. On success the session is re-resolved, which moves the app to
the Home page.
"""

import streamlit as st

from execution.auth.sign_in import sign_in
from execution.backend.base import Backend
from execution.session.pages import SIGNUP
from execution.session.session_controller import SessionController


def render_login(controller: SessionController, backend: Backend) -> None:
    _, col, _ = st.columns([1, 2, 1])
    with col:
        st.title("Welcome Back")
        st.caption("Log in to continue learning.")

        with st.form("login_form"):
            email = st.text_input("Email", placeholder="you@example.com")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Log In", type="primary", width="stretch")

        if submitted:
            with st.spinner("Logging in..."):
                result = sign_in(backend, email, password)
            if result["ok"]:
                controller.resolve_session()
                st.rerun()
            else:
                st.error(result["message"])

        st.divider()
        st.write("Don't have an account?")
        if st.button("Sign up", key="goto_signup"):
            controller.navigate(SIGNUP)
            st.rerun()
