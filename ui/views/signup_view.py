"""
ui/views/signup_view.py

Sign Up page: create an account, then continue to the Login page.
"""

import streamlit as st

from execution.auth.sign_up import sign_up
from execution.backend.base import Backend
from execution.session.pages import LOGIN
from execution.session.session_controller import SessionController


def render_signup(controller: SessionController, backend: Backend) -> None:
    _, col, _ = st.columns([1, 2, 1])
    with col:
        st.title("Create Account")
        st.caption("Join LearnHub and start learning today.")

        with st.form("signup_form"):
            email = st.text_input("Email", placeholder="you@example.com")
            password = st.text_input("Password", type="password")
            confirm = st.text_input("Confirm Password", type="password")
            submitted = st.form_submit_button("Sign Up", type="primary", width="stretch")

        if submitted:
            with st.spinner("Creating account..."):
                result = sign_up(backend, email, password, confirm_password=confirm)
            if result["ok"]:
                st.session_state["flash"] = ("success", result["message"])
                controller.navigate(LOGIN)
                st.rerun()
            else:
                st.error(result["message"])

        st.divider()
        st.write("Already have an account?")
        if st.button("Log in", key="goto_login"):
            controller.navigate(LOGIN)
            st.rerun()
