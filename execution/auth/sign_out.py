"""
execution/auth/sign_out.py

Log-out action. A backend failure is logged but never blocks the local
logout: the caller still clears the principal and shows the login page.
"""

import logging

from execution.backend.base import Backend, IdentityError

logger = logging.getLogger(__name__)


def sign_out(backend: Backend) -> dict:
    """End the current session.

    Returns:
        dict with keys ok (bool) and message (str).
    """
    try:
        backend.identity.sign_out()
    except IdentityError:
        logger.exception("Sign-out failed; clearing local session anyway")
        return {"ok": False, "message": "Signed out locally."}
    return {"ok": True, "message": "Signed out."}
