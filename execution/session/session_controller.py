"""
execution/session/session_controller.py

Owns the application state shared by every view: the current principal,
the loading flag, and the current page. Resolves the principal from the
identity API at startup and again on every identity-change event.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from execution.backend.base import Backend, Principal, Subscription
from execution.session.pages import (
    INITIAL_PAGE,
    LOGIN,
    Page,
    apply_session,
    navigate,
    resolve_view,
)
from execution.session.view_scope import ViewScope

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Explicit application state handed to the views."""

    page: Page = INITIAL_PAGE
    principal: Principal | None = None
    loading: bool = True


class SessionController:
    """Session resolution plus page transitions for one browser session.

    Use start()/teardown() or the context-manager form; the identity-change
    subscription is acquired once and released exactly once.
    """

    def __init__(self, backend: Backend, state: AppState | None = None, scope: ViewScope | None = None) -> None:
        self._backend = backend
        self.state = state if state is not None else AppState()
        self.scope = scope if scope is not None else ViewScope()
        self._subscription: Subscription | None = None
        self._lock = threading.Lock()
        self.scope.mount()

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> Principal | None:
        """Resolve the session and subscribe to identity changes (once)."""
        with self._lock:
            if self._subscription is None:
                self._subscription = self._backend.identity.on_auth_state_change(self._on_auth_event)
        return self.resolve_session()

    def teardown(self) -> None:
        """Release the identity-change subscription and retire the mounted view.

        Safe to call repeatedly. Results still in flight for the retired view
        are dropped.
        """
        self.scope.unmount()
        with self._lock:
            subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.unsubscribe()

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    def __enter__(self) -> "SessionController":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    # -- session ------------------------------------------------------------

    def resolve_session(self) -> Principal | None:
        """Look up the current principal and apply it to the app state.

        Any lookup failure counts as "no principal"; it is logged, never raised.
        """
        try:
            principal = self._backend.identity.get_current_user()
        except Exception:
            logger.exception("Current-user lookup failed; treating session as signed out")
            principal = None

        self._set_principal(principal)
        self._set_page(apply_session(self.state.page, principal))
        return principal

    def clear_principal(self) -> None:
        """Drop the held principal and force the login page (logout)."""
        self._set_principal(None)
        self._set_page(navigate(self.state.page, LOGIN))

    def _on_auth_event(self, event: str, _principal: Principal | None) -> None:
        logger.info("Auth state changed: %s", event)
        self.resolve_session()

    # -- navigation ---------------------------------------------------------

    def navigate(self, target: str, course_id: str | None = None) -> Page:
        """Apply an explicit navigation request and return the resulting page."""
        return self._set_page(navigate(self.state.page, target, course_id))

    def current_view(self) -> str:
        """Name of the view the guard allows for the current state."""
        return resolve_view(self.state.page, self.state.principal, self.state.loading)

    def _set_principal(self, principal: Principal | None) -> None:
        """Hold the principal; a different principal remounts the current view."""
        previous_id = self.state.principal.id if self.state.principal else None
        new_id = principal.id if principal else None
        self.state.principal = principal
        self.state.loading = False
        if new_id != previous_id:
            self.scope.mount()

    def _set_page(self, page: Page) -> Page:
        if page != self.state.page:
            self.state.page = page
            self.scope.mount()
        return self.state.page
