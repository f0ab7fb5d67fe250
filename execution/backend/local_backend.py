"""
execution/backend/local_backend.py

SQLite-backed stand-in for the hosted backend service.

LocalIdentityAPI keeps the signed-in principal in memory (one instance per
browser session, like the hosted client's session storage) and persists
accounts in the users table. LocalDataAPI serves the courses, lessons and
user_progress collections; user_progress rows are scoped to the signed-in
principal the same way the hosted row-level security policy scopes them.
"""

from __future__ import annotations

import itertools
import logging
import sqlite3
import threading
import uuid
from datetime import datetime, timezone

from passlib.context import CryptContext

from execution.backend.base import (
    COURSES,
    LESSONS,
    SIGNED_IN,
    SIGNED_OUT,
    USER_PROGRESS,
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
from execution.db.sqlite import connect, init_db

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Column whitelist per collection. Identifiers are only ever interpolated into
# SQL after passing through this map.
_COLUMNS: dict[str, tuple[str, ...]] = {
    COURSES: ("id", "title", "description", "instructor", "duration", "image_url", "created_at"),
    LESSONS: ("id", "course_id", "title", "content", "order_index", "created_at"),
    USER_PROGRESS: ("id", "user_id", "course_id", "completed", "completed_at", "created_at"),
}
_BOOL_COLUMNS: dict[str, frozenset[str]] = {
    USER_PROGRESS: frozenset({"completed"}),
}
# Collections whose rows belong to a principal: collection -> owner column.
_OWNER_COLUMN: dict[str, str] = {
    USER_PROGRESS: "user_id",
}


def _utc_now() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

class LocalIdentityAPI(IdentityAPI):
    """Email/password accounts stored in SQLite; session held in memory."""

    def __init__(self, db_path: str | None = None) -> None:
        self._db_path = db_path
        self._current: Principal | None = None
        self._listeners: dict[int, AuthCallback] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def sign_up(self, email: str, password: str) -> Principal:
        email = (email or "").strip().lower()
        if not email or "@" not in email:
            raise IdentityError("Unable to validate email address: invalid format")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise IdentityError(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters."
            )

        principal = Principal(id=str(uuid.uuid4()), email=email)
        try:
            conn = connect(self._db_path)
            try:
                init_db(conn)
                existing = conn.execute(
                    "SELECT id FROM users WHERE email = ?", (email,)
                ).fetchone()
                if existing is not None:
                    raise IdentityError("User already registered")
                conn.execute(
                    """
                    INSERT INTO users (id, email, password_hash, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (principal.id, email, _pwd.hash(password), _utc_now()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise IdentityError(f"Sign-up failed: {exc}") from exc

        # Mirrors a hosted project with email confirmation on: the account is
        # created but no session is started.
        return principal

    def sign_in(self, email: str, password: str) -> Principal:
        email = (email or "").strip().lower()
        try:
            conn = connect(self._db_path)
            try:
                init_db(conn)
                row = conn.execute(
                    "SELECT id, email, password_hash FROM users WHERE email = ?",
                    (email,),
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise IdentityError(f"Sign-in failed: {exc}") from exc

        if row is None or not _pwd.verify(password or "", row["password_hash"]):
            raise IdentityError("Invalid login credentials")

        principal = Principal(id=row["id"], email=row["email"])
        with self._lock:
            self._current = principal
        self._emit(SIGNED_IN, principal)
        return principal

    def sign_out(self) -> None:
        with self._lock:
            was_signed_in = self._current is not None
            self._current = None
        if was_signed_in:
            self._emit(SIGNED_OUT, None)

    def get_current_user(self) -> Principal | None:
        return self._current

    def on_auth_state_change(self, callback: AuthCallback) -> Subscription:
        with self._lock:
            listener_id = next(self._ids)
            self._listeners[listener_id] = callback

        def _release() -> None:
            with self._lock:
                self._listeners.pop(listener_id, None)

        return Subscription(_release)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _emit(self, event: str, principal: Principal | None) -> None:
        with self._lock:
            listeners = list(self._listeners.values())
        for callback in listeners:
            try:
                callback(event, principal)
            except Exception:
                logger.exception("Auth state listener failed on %s", event)


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------

class LocalDataAPI(DataAPI):
    """Equality-filtered CRUD over the local SQLite tables."""

    def __init__(self, identity: LocalIdentityAPI, db_path: str | None = None) -> None:
        self._identity = identity
        self._db_path = db_path

    # -- public API ---------------------------------------------------------

    def select(
        self,
        collection: str,
        filters: dict | None = None,
        order: Order | None = None,
    ) -> list[dict]:
        columns = self._columns(collection)
        scoped = self._scoped_filters(collection, filters)
        if scoped is None:
            return []  # owned collection, nobody signed in

        where, params = self._where(collection, scoped)
        sql = f"SELECT {', '.join(columns)} FROM {collection}{where}"  # noqa: S608
        if order is not None:
            self._check_column(collection, order.column)
            direction = "ASC" if order.ascending else "DESC"
            sql += f" ORDER BY {order.column} {direction}, rowid ASC"

        rows = self._fetch(sql, params)
        return [self._to_record(collection, row) for row in rows]

    def select_one(self, collection: str, filters: dict) -> dict | None:
        rows = self.select(collection, filters)
        if len(rows) > 1:
            raise DataError(
                f"Multiple ({len(rows)}) rows returned from {collection} where at most one was expected"
            )
        return rows[0] if rows else None

    def insert(self, collection: str, record: dict) -> dict:
        columns = self._columns(collection)
        row = dict(record)
        row.setdefault("id", str(uuid.uuid4()))
        if "created_at" in columns:
            row.setdefault("created_at", _utc_now())

        owner_column = _OWNER_COLUMN.get(collection)
        if owner_column is not None:
            principal = self._identity.get_current_user()
            if principal is None:
                raise DataError(f"Not authenticated: cannot insert into {collection}")
            row.setdefault(owner_column, principal.id)
            if row[owner_column] != principal.id:
                raise DataError(
                    f'new row violates row-level security policy for table "{collection}"'
                )

        for column in row:
            self._check_column(collection, column)

        names = list(row)
        placeholders = ", ".join("?" for _ in names)
        sql = f"INSERT INTO {collection} ({', '.join(names)}) VALUES ({placeholders})"  # noqa: S608
        self._execute(sql, [self._to_db(collection, name, row[name]) for name in names])

        stored = self.select_one(collection, {"id": row["id"]})
        if stored is None:
            raise DataError(f"Inserted row {row['id']!r} not readable from {collection}")
        return stored

    def update(self, collection: str, filters: dict, patch: dict) -> None:
        if not patch:
            return
        scoped = self._scoped_filters(collection, filters)
        if scoped is None:
            return  # nothing visible to update

        for column in patch:
            self._check_column(collection, column)
            if column == "id" or column == _OWNER_COLUMN.get(collection):
                raise DataError(f"Column {column!r} of {collection} cannot be updated")

        set_clause = ", ".join(f"{column} = ?" for column in patch)
        where, params = self._where(collection, scoped)
        values = [self._to_db(collection, column, value) for column, value in patch.items()]
        sql = f"UPDATE {collection} SET {set_clause}{where}"  # noqa: S608
        self._execute(sql, values + params)

    # -- helpers ------------------------------------------------------------

    def _columns(self, collection: str) -> tuple[str, ...]:
        if collection not in _COLUMNS:
            raise DataError(f"Unknown collection: {collection!r}")
        return _COLUMNS[collection]

    def _check_column(self, collection: str, column: str) -> None:
        if column not in self._columns(collection):
            raise DataError(f"Unknown column {column!r} for {collection}")

    def _scoped_filters(self, collection: str, filters: dict | None) -> dict | None:
        scoped = dict(filters or {})
        owner_column = _OWNER_COLUMN.get(collection)
        if owner_column is None:
            return scoped
        principal = self._identity.get_current_user()
        if principal is None:
            return None
        if owner_column in scoped and scoped[owner_column] != principal.id:
            return None  # other users' rows are never visible
        scoped[owner_column] = principal.id
        return scoped

    def _where(self, collection: str, filters: dict) -> tuple[str, list]:
        if not filters:
            return "", []
        clauses = []
        params = []
        for column, value in filters.items():
            self._check_column(collection, column)
            if value is None:
                clauses.append(f"{column} IS NULL")
            else:
                clauses.append(f"{column} = ?")
                params.append(self._to_db(collection, column, value))
        return " WHERE " + " AND ".join(clauses), params

    @staticmethod
    def _to_db(collection: str, column: str, value):
        if column in _BOOL_COLUMNS.get(collection, ()) and value is not None:
            return 1 if value else 0
        return value

    @staticmethod
    def _to_record(collection: str, row: sqlite3.Row) -> dict:
        record = dict(row)
        for column in _BOOL_COLUMNS.get(collection, ()):
            if record.get(column) is not None:
                record[column] = bool(record[column])
        return record

    def _fetch(self, sql: str, params: list) -> list[sqlite3.Row]:
        try:
            conn = connect(self._db_path)
            try:
                init_db(conn)
                return conn.execute(sql, params).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise DataError(str(exc)) from exc

    def _execute(self, sql: str, params: list) -> None:
        try:
            conn = connect(self._db_path)
            try:
                init_db(conn)
                conn.execute(sql, params)
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise DataError(str(exc)) from exc


def create_local_backend(db_path: str | None = None) -> Backend:
    """Return a Backend wired to the local SQLite database at db_path."""
    identity = LocalIdentityAPI(db_path=db_path)
    return Backend(identity=identity, data=LocalDataAPI(identity, db_path=db_path))
