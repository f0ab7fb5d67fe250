"""
execution/backend/base.py

Contract for the external backend collaborator: an identity API and a
tabular data API over named collections. Concrete implementations live in
local_backend.py (SQLite) and supabase_backend.py (hosted Supabase).
No business logic lives here.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

# Identity-change event names (same strings the hosted service emits).
SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"

# Collection names used by the app.
COURSES = "courses"
LESSONS = "lessons"
USER_PROGRESS = "user_progress"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BackendError(Exception):
    """Base class for failures reported by the backend collaborator."""


class IdentityError(BackendError):
    """Sign-up, sign-in, sign-out or current-user lookup failed."""


class DataError(BackendError):
    """A select, insert or update against a collection failed."""


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Principal:
    """Authenticated identity returned by the identity API."""

    id: str
    email: str


@dataclass(frozen=True)
class Order:
    """Single-column sort for select()."""

    column: str
    ascending: bool = True


AuthCallback = Callable[[str, "Principal | None"], None]


class Subscription:
    """Handle for an identity-change listener.

    unsubscribe() runs the release function at most once, no matter how many
    times it is called.
    """

    def __init__(self, release: Callable[[], None]) -> None:
        self._release = release
        self._lock = threading.Lock()
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
        self._release()


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

class IdentityAPI(ABC):
    """Authentication operations delegated to the collaborator."""

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Principal:
        """Register a new account. Raises IdentityError on failure."""

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Principal:
        """Start a session. Raises IdentityError on bad credentials."""

    @abstractmethod
    def sign_out(self) -> None:
        """End the current session. Raises IdentityError on failure."""

    @abstractmethod
    def get_current_user(self) -> Principal | None:
        """Return the signed-in principal, or None when there is no session."""

    @abstractmethod
    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        """Register callback(event, principal) for login/logout/refresh events."""


class DataAPI(ABC):
    """Filtered CRUD over named collections.

    Filters are equality predicates: {"column": value}.
    """

    @abstractmethod
    def select(
        self,
        collection: str,
        filters: dict | None = None,
        order: Order | None = None,
    ) -> list[dict]:
        """Return all matching rows, optionally sorted."""

    @abstractmethod
    def select_one(self, collection: str, filters: dict) -> dict | None:
        """Return the single matching row, None when absent.

        Raises DataError when more than one row matches.
        """

    @abstractmethod
    def insert(self, collection: str, record: dict) -> dict:
        """Insert record and return the stored row (with server-assigned id)."""

    @abstractmethod
    def update(self, collection: str, filters: dict, patch: dict) -> None:
        """Apply patch to every matching row."""


@dataclass
class Backend:
    """The pair of collaborator APIs handed to execution functions."""

    identity: IdentityAPI
    data: DataAPI
