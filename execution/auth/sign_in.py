"""
execution/auth/sign_in.py

Log-in action for the Login page. The session controller picks up the new
principal through the identity-change subscription.
"""

import logging

from execution.backend.base import Backend, IdentityError

logger = logging.getLogger(__name__)


def sign_in(backend: Backend, email: str, password: str) -> dict:
    """Start a session for email/password.

    Returns:
        dict with keys ok (bool) and message (str). On failure the message is
        the backend's own detail when available.
    """
    email = (email or "").strip()
    if not email or not password:
        return {"ok": False, "message": "Email and password are required."}

    try:
        principal = backend.identity.sign_in(email, password)
    except IdentityError as exc:
        logger.warning("Login failed for %s: %s", email, exc)
        return {"ok": False, "message": str(exc) or "Login failed."}

    return {"ok": True, "message": f"Signed in as {principal.email}."}
