"""
tests/test_auth_actions.py

Unit tests for execution/auth/sign_up.py, sign_in.py and sign_out.py.

Covers:
    T1 — sign-up form validation happens before any backend call
    T2 — sign-up success and collaborator failure messages
    T3 — login success and collaborator failure messages
    T4 — logout success and failure

Uses an isolated database (tmp/test_auth_actions.db).
"""

import os
import sys
import unittest
from pathlib import Path
from unittest import mock

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap — repo root must be importable from any test runner.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.auth.sign_in import sign_in                         # noqa: E402
from execution.auth.sign_out import sign_out                       # noqa: E402
from execution.auth.sign_up import sign_up                         # noqa: E402
from execution.backend.base import Backend, IdentityError          # noqa: E402
from execution.backend.local_backend import create_local_backend  # noqa: E402

TEST_DB_PATH = str(REPO_ROOT / "tmp" / "test_auth_actions.db")

EMAIL = "learner@example.com"
PASSWORD = "secret-pass"


class TestAuthActions(unittest.TestCase):

    def setUp(self):
        (REPO_ROOT / "tmp").mkdir(parents=True, exist_ok=True)
        self.backend = create_local_backend(db_path=TEST_DB_PATH)

    def tearDown(self):
        if os.path.exists(TEST_DB_PATH):
            os.remove(TEST_DB_PATH)

    # ------------------------------------------------------------------
    # T1 — sign-up validation
    # ------------------------------------------------------------------
    def test_sign_up_requires_email(self):
        result = sign_up(self.backend, "   ", PASSWORD)
        self.assertFalse(result["ok"])
        self.assertEqual(result["message"], "Email is required.")

    def test_sign_up_requires_password(self):
        result = sign_up(self.backend, EMAIL, "")
        self.assertFalse(result["ok"])
        self.assertEqual(result["message"], "Password is required.")

    def test_sign_up_rejects_mismatched_confirmation(self):
        identity = mock.MagicMock()
        backend = Backend(identity=identity, data=mock.MagicMock())

        result = sign_up(backend, EMAIL, PASSWORD, confirm_password="other-pass")

        self.assertFalse(result["ok"])
        self.assertEqual(result["message"], "Passwords do not match.")
        identity.sign_up.assert_not_called()

    # ------------------------------------------------------------------
    # T2 — sign-up outcome
    # ------------------------------------------------------------------
    def test_sign_up_success(self):
        result = sign_up(self.backend, f"  {EMAIL} ", PASSWORD, confirm_password=PASSWORD)
        self.assertTrue(result["ok"])
        self.assertIn("log in", result["message"])
        self.assertIsNone(self.backend.identity.get_current_user())

    def test_sign_up_surfaces_collaborator_message(self):
        sign_up(self.backend, EMAIL, PASSWORD)
        result = sign_up(self.backend, EMAIL, PASSWORD)
        self.assertFalse(result["ok"])
        self.assertEqual(result["message"], "User already registered")

    def test_sign_up_short_password_message(self):
        result = sign_up(self.backend, EMAIL, "abc")
        self.assertFalse(result["ok"])
        self.assertIn("at least 6 characters", result["message"])

    # ------------------------------------------------------------------
    # T3 — login
    # ------------------------------------------------------------------
    def test_sign_in_success(self):
        sign_up(self.backend, EMAIL, PASSWORD)
        result = sign_in(self.backend, EMAIL, PASSWORD)

        self.assertTrue(result["ok"])
        self.assertIn(EMAIL, result["message"])
        self.assertEqual(self.backend.identity.get_current_user().email, EMAIL)

    def test_sign_in_requires_both_fields(self):
        result = sign_in(self.backend, "", PASSWORD)
        self.assertFalse(result["ok"])
        self.assertEqual(result["message"], "Email and password are required.")

    def test_sign_in_bad_credentials_message(self):
        sign_up(self.backend, EMAIL, PASSWORD)
        result = sign_in(self.backend, EMAIL, "wrong-pass")
        self.assertFalse(result["ok"])
        self.assertEqual(result["message"], "Invalid login credentials")
        self.assertIsNone(self.backend.identity.get_current_user())

    # ------------------------------------------------------------------
    # T4 — logout
    # ------------------------------------------------------------------
    def test_sign_out_success(self):
        sign_up(self.backend, EMAIL, PASSWORD)
        sign_in(self.backend, EMAIL, PASSWORD)

        result = sign_out(self.backend)

        self.assertTrue(result["ok"])
        self.assertIsNone(self.backend.identity.get_current_user())

    def test_sign_out_failure_is_logged_not_raised(self):
        identity = mock.MagicMock()
        identity.sign_out.side_effect = IdentityError("network down")
        backend = Backend(identity=identity, data=mock.MagicMock())

        with self.assertLogs("execution.auth.sign_out", level="ERROR"):
            result = sign_out(backend)

        self.assertFalse(result["ok"])


if __name__ == "__main__":
    unittest.main()
