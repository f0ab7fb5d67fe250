"""
execution/backend/supabase_backend.py

Adapter from the hosted Supabase project to the IdentityAPI / DataAPI
contract. One client per browser session: the client holds that session's
auth tokens and sends them with every table request, so user_progress reads
and writes are scoped by the project's row-level security policies.
"""

from __future__ import annotations

import logging

from postgrest.exceptions import APIError
from supabase import Client, ClientOptions, create_client

from execution.backend.base import (
    AuthCallback,
    Backend,
    DataAPI,
    DataError,
    IdentityAPI,
    IdentityError,
    Order,
    Principal,
    Subscription,
)
from execution.config import get_supabase_settings

logger = logging.getLogger(__name__)


def _principal_from_user(user) -> Principal | None:
    if user is None:
        return None
    return Principal(id=str(user.id), email=user.email or "")


def _error_message(exc: Exception) -> str:
    return getattr(exc, "message", None) or str(exc)


class SupabaseIdentityAPI(IdentityAPI):
    """Identity operations via client.auth."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def sign_up(self, email: str, password: str) -> Principal:
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except Exception as exc:
            raise IdentityError(_error_message(exc)) from exc
        principal = _principal_from_user(response.user)
        if principal is None:
            raise IdentityError("Sign-up returned no user")
        return principal

    def sign_in(self, email: str, password: str) -> Principal:
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            raise IdentityError(_error_message(exc)) from exc
        principal = _principal_from_user(response.user)
        if principal is None:
            raise IdentityError("Sign-in returned no user")
        return principal

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as exc:
            raise IdentityError(_error_message(exc)) from exc

    def get_current_user(self) -> Principal | None:
        try:
            response = self._client.auth.get_user()
        except Exception as exc:
            raise IdentityError(_error_message(exc)) from exc
        if response is None:
            return None
        return _principal_from_user(response.user)

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        def _listener(event, session) -> None:
            user = session.user if session is not None else None
            callback(str(event), _principal_from_user(user))

        hosted = self._client.auth.on_auth_state_change(_listener)
        return Subscription(hosted.unsubscribe)


class SupabaseDataAPI(DataAPI):
    """Table operations via the PostgREST query builder."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def select(
        self,
        collection: str,
        filters: dict | None = None,
        order: Order | None = None,
    ) -> list[dict]:
        query = self._client.table(collection).select("*")
        query = self._apply_filters(query, filters)
        if order is not None:
            query = query.order(order.column, desc=not order.ascending)
        return list(self._run(query).data or [])

    def select_one(self, collection: str, filters: dict) -> dict | None:
        # limit(2) is enough to tell "one" from "more than one".
        query = self._apply_filters(self._client.table(collection).select("*"), filters).limit(2)
        rows = list(self._run(query).data or [])
        if len(rows) > 1:
            raise DataError(
                f"Multiple rows returned from {collection} where at most one was expected"
            )
        return rows[0] if rows else None

    def insert(self, collection: str, record: dict) -> dict:
        rows = list(self._run(self._client.table(collection).insert(record)).data or [])
        if not rows:
            raise DataError(f"Insert into {collection} returned no row")
        return rows[0]

    def update(self, collection: str, filters: dict, patch: dict) -> None:
        query = self._apply_filters(self._client.table(collection).update(patch), filters)
        self._run(query)

    @staticmethod
    def _apply_filters(query, filters: dict | None):
        for column, value in (filters or {}).items():
            query = query.is_(column, "null") if value is None else query.eq(column, value)
        return query

    @staticmethod
    def _run(query):
        try:
            return query.execute()
        except APIError as exc:
            raise DataError(_error_message(exc)) from exc


def create_supabase_backend(client: Client | None = None) -> Backend:
    """Return a Backend over a fresh Supabase client (or the one supplied).

    Raises:
        ValueError: If SUPABASE_URL / SUPABASE_ANON_KEY are not configured.
    """
    if client is None:
        url, key = get_supabase_settings()
        client = create_client(url, key, options=ClientOptions(persist_session=False))
    return Backend(identity=SupabaseIdentityAPI(client), data=SupabaseDataAPI(client))
