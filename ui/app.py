"""
ui/app.py

LearnHub — course catalog and progress tracking.
One script, four pages (sign up, login, home, course detail); the current
page lives in the session controller's app state.

Run from the repository root:
    streamlit run ui/app.py
"""

import logging
import sys
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Ensure repo root is on sys.path so execution.* imports work regardless of
# where Streamlit is launched from.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.backend.get_backend import get_backend                    # noqa: E402
from execution.config import get_log_level                               # noqa: E402
from execution.session.pages import COURSE_DETAIL, HOME, LOADING, SIGNUP  # noqa: E402
from execution.session.session_controller import SessionController       # noqa: E402
from ui.theme import apply_learnhub_theme                                # noqa: E402
from ui.views.course_detail_view import render_course_detail            # noqa: E402
from ui.views.home_view import render_home                              # noqa: E402
from ui.views.login_view import render_login                            # noqa: E402
from ui.views.signup_view import render_signup                          # noqa: E402

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ---------------------------------------------------------------------------
# Page config — must be the first Streamlit call in the file.
# ---------------------------------------------------------------------------
st.set_page_config(page_title="LearnHub", page_icon="📘", layout="wide")

# ---------------------------------------------------------------------------
# Session state initialisation — one backend client and one controller per
# browser session.
# ---------------------------------------------------------------------------
if "backend" not in st.session_state:
    try:
        st.session_state["backend"] = get_backend()
    except ValueError as exc:
        st.error(str(exc))
        st.stop()
    except Exception:
        logging.exception("Unexpected error creating backend client")
        st.error("An unexpected error occurred. See console for details.")
        st.stop()

backend = st.session_state["backend"]

# The controller lives as long as the browser session. Streamlit offers no
# session-end hook, so its identity subscription is released with the
# session itself; teardown() is for owners with an explicit end of life.
if "session" not in st.session_state:
    controller = SessionController(backend)
    controller.start()
    st.session_state["session"] = controller

controller: SessionController = st.session_state["session"]
state = controller.state

apply_learnhub_theme(
    "Courses & progress",
    user_email=state.principal.email if state.principal else None,
)

# Flash message — stored before st.rerun() so it survives the cycle.
if st.session_state.get("flash") is not None:
    level, msg = st.session_state.pop("flash")
    if level == "success":
        st.success(msg)
    else:
        st.error(msg)

# ---------------------------------------------------------------------------
# Page dispatch
# ---------------------------------------------------------------------------
view = controller.current_view()

try:
    if view == LOADING:
        with st.spinner("Loading..."):
            controller.resolve_session()
        st.rerun()
    elif view == SIGNUP:
        render_signup(controller, backend)
    elif view == HOME:
        render_home(controller, backend)
    elif view == COURSE_DETAIL:
        render_course_detail(controller, backend, state.page.course_id)
    else:
        render_login(controller, backend)
except Exception:
    # st.rerun() and st.stop() raise BaseException subclasses and pass through.
    logging.exception("Unexpected error rendering %s", view)
    st.error("An unexpected error occurred. See console for details.")
