"""
ui/theme.py

LearnHub shared theme helper.
Call apply_learnhub_theme() immediately after st.set_page_config() to inject
brand styling and render the top bar.

Brand tokens:
    primary blue:  #2563EB
    success green: #16A34A
    slate:         #1E293B
    light slate:   #F1F5F9
    muted gray:    #64748B
"""

from __future__ import annotations

import html

import streamlit as st

# ---------------------------------------------------------------------------
# Brand tokens
# ---------------------------------------------------------------------------
_PRIMARY_BLUE  = "#2563EB"
_SUCCESS_GREEN = "#16A34A"
_SLATE         = "#1E293B"
_LIGHT_SLATE   = "#F1F5F9"
_MUTED_GRAY    = "#64748B"

# ---------------------------------------------------------------------------
# CSS — injected once per page render.
# Double braces {{ }} produce literal CSS braces in the f-string.
# ---------------------------------------------------------------------------
_CSS = f"""
<style>
.block-container {{
    padding-top: 0.75rem !important;
    padding-bottom: 2rem !important;
}}

#MainMenu {{ visibility: hidden; }}
footer {{ visibility: hidden; }}
header {{ visibility: hidden; }}

.stApp {{
    background: linear-gradient(135deg, #EFF6FF 0%, {_LIGHT_SLATE} 100%);
}}

.stButton > button[kind="primary"] {{
    background-color: {_PRIMARY_BLUE} !important;
    color: white !important;
    border: none !important;
    border-radius: 10px !important;
    padding: 0.45rem 0.9rem !important;
}}
.stButton > button[kind="primary"]:hover {{
    background-color: #1D4ED8 !important;
}}
.stButton > button {{
    border-radius: 10px !important;
}}

/* Course cards */
div[data-testid="stVerticalBlockBorderWrapper"] {{
    background-color: white;
    border-radius: 14px;
}}

.learnhub-badge {{
    display: inline-block;
    background-color: {_SUCCESS_GREEN};
    color: white;
    font-size: 0.8rem;
    font-weight: 600;
    border-radius: 999px;
    padding: 0.15rem 0.6rem;
}}

hr {{
    border: none !important;
    border-top: 1px solid #E2E8F0 !important;
    margin: 1rem 0 !important;
}}
</style>
"""


def completed_badge_html() -> str:
    """HTML for the green "Completed" pill shown on finished courses."""
    return "<span class='learnhub-badge'>✓ Completed</span>"


def apply_learnhub_theme(subtitle: str | None = None, user_email: str | None = None) -> None:
    """Inject LearnHub CSS and render the sticky top bar.

    Must be called immediately after st.set_page_config().
    """
    st.markdown(_CSS, unsafe_allow_html=True)

    subtitle_html = (
        f"<div style='color:{_LIGHT_SLATE}; font-size:0.85rem; margin-top:0.15rem;'>"
        f"{html.escape(subtitle)}</div>"
        if subtitle else
        ""
    )
    user_html = (
        f"👤 {html.escape(user_email)}"
        if user_email else
        ""
    )

    st.markdown(
        f"""
        <div style="
            position: sticky;
            top: 0;
            z-index: 999;
            background: {_SLATE};
            border-bottom: 3px solid {_PRIMARY_BLUE};
            padding: 0.65rem 1.25rem;
            margin: -0.75rem -1rem 1.0rem -1rem;
            display: flex;
            align-items: center;
            gap: 1rem;
        ">
            <div style="font-size:1.6rem;">📘</div>

            <div style="display:flex; flex-direction:column; line-height:1.1;">
                <div style="color:white; font-size:1.25rem; font-weight:650;">
                    LearnHub
                </div>
                {subtitle_html}
            </div>

            <div style="margin-left:auto; color:{_MUTED_GRAY}; font-size:0.85rem;">
                {user_html}
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )
