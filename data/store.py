"""
Data Store Clients

Table-level select/insert/update/delete over the portfolio tables. A store is
constructed explicitly and handed to whatever needs data access.
"""

import copy
import logging
from abc import ABC, abstractmethod
import threading
import uuid
from typing import Any, Dict, Iterable, List, Optional

from supabase import AuthApiError, Client, create_client
from supabase.client import ClientOptions

from models.auth import AuthUser
from config.defaults import TABLES, TABLE_VACANT_SPACES

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the underlying store rejects or fails a request."""


class NotFoundError(StoreError):
    """Raised when a requested record does not exist."""


class DataStore(ABC):
    """Query surface shared by every backend.

    ``eq`` filters by equality and ``in_`` by membership, both keyed by column.
    """

    @abstractmethod
    def select(
        self,
        table: str,
        columns: str = "*",
        eq: Optional[Dict[str, Any]] = None,
        in_: Optional[Dict[str, Iterable]] = None,
        order: Optional[str] = None,
        desc: bool = False,
    ) -> List[dict]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, table: str, rows) -> List[dict]:
        raise NotImplementedError

    @abstractmethod
    def update(self, table: str, values: dict, eq: Dict[str, Any]) -> List[dict]:
        raise NotImplementedError

    @abstractmethod
    def delete(
        self,
        table: str,
        eq: Optional[Dict[str, Any]] = None,
        in_: Optional[Dict[str, Iterable]] = None,
    ) -> List[dict]:
        raise NotImplementedError

    @abstractmethod
    def authenticate(self, email: str, password: str) -> Optional[AuthUser]:
        raise NotImplementedError

    def select_one(self, table: str, eq: Dict[str, Any], columns: str = "*") -> dict:
        rows = self.select(table, columns=columns, eq=eq)
        if not rows:
            raise NotFoundError(f"No {table} row matching {eq}")
        return rows[0]


def _project(row: dict, columns: str) -> dict:
    if columns.strip() == "*":
        return row
    wanted = [c.strip() for c in columns.split(",")]
    return {c: row.get(c) for c in wanted}


def _sort_key(value):
    # None first, then numbers, then everything else as strings
    if value is None:
        return (0, 0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (1, value, "")
    return (2, 0, str(value))


class InMemoryStore(DataStore):
    """Store held in process memory. Used for the offline demo and in tests."""

    def __init__(self, users: Optional[Dict[str, str]] = None):
        self._tables: Dict[str, List[dict]] = {t: [] for t in TABLES}
        self._users = dict(users or {})
        self._lock = threading.Lock()

    def _rows(self, table: str) -> List[dict]:
        if table not in self._tables:
            raise StoreError(f"Unknown table: {table}")
        return self._tables[table]

    @staticmethod
    def _matches(row: dict, eq, in_) -> bool:
        for col, value in (eq or {}).items():
            if row.get(col) != value:
                return False
        for col, values in (in_ or {}).items():
            if row.get(col) not in set(values):
                return False
        return True

    def select(self, table, columns="*", eq=None, in_=None, order=None, desc=False):
        with self._lock:
            rows = [copy.deepcopy(r) for r in self._rows(table) if self._matches(r, eq, in_)]
        if order:
            rows.sort(key=lambda r: _sort_key(r.get(order)), reverse=desc)
        return [_project(r, columns) for r in rows]

    def insert(self, table, rows):
        if isinstance(rows, dict):
            rows = [rows]
        inserted = []
        with self._lock:
            existing = self._rows(table)
            for row in rows:
                row = copy.deepcopy(row)
                if table != TABLE_VACANT_SPACES and not row.get("id"):
                    row["id"] = str(uuid.uuid4())
                if row.get("id") is not None and any(r.get("id") == row["id"] for r in existing):
                    raise StoreError(f'duplicate key value violates unique constraint "{table}_pkey"')
                existing.append(row)
                inserted.append(copy.deepcopy(row))
        return inserted

    def update(self, table, values, eq):
        updated = []
        with self._lock:
            for row in self._rows(table):
                if self._matches(row, eq, None):
                    row.update(copy.deepcopy(values))
                    updated.append(copy.deepcopy(row))
        return updated

    def delete(self, table, eq=None, in_=None):
        with self._lock:
            rows = self._rows(table)
            removed = [r for r in rows if self._matches(r, eq, in_)]
            self._tables[table] = [r for r in rows if not self._matches(r, eq, in_)]
        return removed

    def authenticate(self, email, password):
        if email and self._users.get(email) == password:
            return AuthUser(id=email, email=email)
        return None

    def row_count(self, table: str) -> int:
        return len(self._rows(table))


class SupabaseStore(DataStore):
    """Store backed by a Supabase project through its PostgREST query builder."""

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings) -> "SupabaseStore":
        key = settings.supabase_service_key or settings.supabase_anon_key
        if not settings.supabase_url or not key:
            raise StoreError("Supabase URL and key must be configured")
        client = create_client(
            settings.supabase_url,
            key,
            options=ClientOptions(
                postgrest_client_timeout=settings.request_timeout,
                storage_client_timeout=settings.request_timeout,
            ),
        )
        return cls(client)

    @staticmethod
    def _apply_filters(query, eq, in_):
        for col, value in (eq or {}).items():
            query = query.eq(col, value)
        for col, values in (in_ or {}).items():
            query = query.in_(col, list(values))
        return query

    def _execute(self, query, action: str, table: str) -> List[dict]:
        try:
            result = query.execute()
        except Exception as e:
            logger.error(f"Supabase {action} on {table} failed: {e}")
            raise StoreError(str(e)) from e
        return result.data or []

    def select(self, table, columns="*", eq=None, in_=None, order=None, desc=False):
        # PostgREST rejects an empty in() list, and it would match nothing anyway
        if any(not list(v) for v in (in_ or {}).values()):
            return []
        query = self._apply_filters(self.client.table(table).select(columns), eq, in_)
        if order:
            query = query.order(order, desc=desc)
        return self._execute(query, "select", table)

    def insert(self, table, rows):
        return self._execute(self.client.table(table).insert(rows), "insert", table)

    def update(self, table, values, eq):
        query = self._apply_filters(self.client.table(table).update(values), eq, None)
        return self._execute(query, "update", table)

    def delete(self, table, eq=None, in_=None):
        if any(not list(v) for v in (in_ or {}).values()):
            return []
        query = self._apply_filters(self.client.table(table).delete(), eq, in_)
        return self._execute(query, "delete", table)

    def authenticate(self, email, password):
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthApiError as e:
            logger.info(f"Sign-in rejected for {email}: {e}")
            return None
        except Exception as e:
            logger.error(f"Supabase sign-in for {email} failed: {e}")
            raise StoreError(str(e)) from e
        if not response.user:
            return None
        token = response.session.access_token if response.session else None
        return AuthUser(id=response.user.id, email=response.user.email or email, access_token=token)


def create_store(settings) -> DataStore:
    """Build the store selected by ``settings.data_backend``."""
    backend = settings.data_backend.lower()
    if backend == "supabase":
        logger.info("Using Supabase data store")
        return SupabaseStore.from_settings(settings)
    if backend == "memory":
        logger.info("Using in-memory data store")
        return InMemoryStore(users=settings.demo_users)
    raise ValueError(f"Unknown data backend: {settings.data_backend}. Use 'memory' or 'supabase'.")
