"""
execution/auth/sign_up.py

Sign-up action for the Sign Up page. Validates the form, then delegates
account creation to the identity API.
"""

import logging

from execution.backend.base import Backend, IdentityError

logger = logging.getLogger(__name__)


def sign_up(
    backend: Backend,
    email: str,
    password: str,
    confirm_password: str | None = None,
) -> dict:
    """Create an account for email/password.

    Args:
        backend:          Backend collaborator for this session.
        email:            Email address; whitespace is trimmed.
        password:         Chosen password (length rules belong to the backend).
        confirm_password: Optional second entry; must equal password when given.

    Returns:
        dict with keys:
            ok       (bool)  True when the account was created.
            message  (str)   Human-readable outcome; on failure the
                             backend's own message when it gave one.
    """
    email = (email or "").strip()
    if not email:
        return {"ok": False, "message": "Email is required."}
    if not password:
        return {"ok": False, "message": "Password is required."}
    if confirm_password is not None and confirm_password != password:
        return {"ok": False, "message": "Passwords do not match."}

    try:
        backend.identity.sign_up(email, password)
    except IdentityError as exc:
        logger.warning("Sign-up failed for %s: %s", email, exc)
        return {"ok": False, "message": str(exc) or "Sign-up failed."}

    return {"ok": True, "message": "Account created. Please log in."}
