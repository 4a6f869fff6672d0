import os

# Settings are read at import time; point them somewhere harmless first
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

import pytest
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import AsyncGenerator
from uuid import uuid4
from httpx import ASGITransport, AsyncClient
from asgi_lifespan import LifespanManager
from postgrest.exceptions import APIError

from app.core.supabase import get_anon_client, get_supabase_client
from main import app


class FakeAuthError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FakeQuery:
    """Just enough of the PostgREST query builder for the CMS."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.op = "select"
        self.payload = None
        self.on_conflict = None
        self.filters = []
        self.single = False
        self.order_by = None
        self.row_limit = None
        self.row_range = None

    def select(self, *columns, **kwargs):
        self.op = "select"
        return self

    def insert(self, data):
        self.op, self.payload = "insert", data
        return self

    def update(self, data):
        self.op, self.payload = "update", data
        return self

    def upsert(self, data, on_conflict=None, **kwargs):
        self.op, self.payload, self.on_conflict = "upsert", data, on_conflict
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def range(self, start, end):
        self.row_range = (start, end)
        return self

    def maybe_single(self):
        self.single = True
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.db.calls.append((self.op, self.table_name))
        if (self.op, self.table_name) in self.db.failures:
            raise APIError({"message": f"{self.op} on {self.table_name} failed", "code": "XX000"})

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.op == "insert":
            items = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = []
            for item in items:
                row = dict(item)
                row.setdefault("id", str(uuid4()))
                row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
                rows.append(row)
                inserted.append(dict(row))
            return SimpleNamespace(data=inserted)

        if self.op == "update":
            changed = [row for row in rows if self._matches(row)]
            for row in changed:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in changed])

        if self.op == "upsert":
            key = self.on_conflict or "id"
            existing = [row for row in rows if row.get(key) == self.payload.get(key)]
            if existing:
                existing[0].update(self.payload)
                return SimpleNamespace(data=[dict(existing[0])])
            row = dict(self.payload)
            row.setdefault("id", str(uuid4()))
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        if self.op == "delete":
            removed = [row for row in rows if self._matches(row)]
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=removed)

        result = [dict(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            result.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self.row_limit is not None:
            result = result[:self.row_limit]
        if self.row_range is not None:
            start, end = self.row_range
            result = result[start:end + 1]
        # PostgREST max-rows
        result = result[:self.db.max_rows]
        if self.single:
            return SimpleNamespace(data=result[0] if result else None)
        return SimpleNamespace(data=result)


class FakeRpc:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.calls.append(("rpc", self.name))
        if ("rpc", self.name) in self.db.failures:
            raise APIError({"message": f"rpc {self.name} failed", "code": "XX000"})

        if self.name == "get_user_role":
            for row in self.db.tables.get("user_roles", []):
                if row["user_id"] == self.params["user_id"]:
                    return SimpleNamespace(data=row["role"])
            return SimpleNamespace(data=None)

        if self.name == "get_all_users_with_roles":
            roles = {row["user_id"]: row["role"] for row in self.db.tables.get("user_roles", [])}
            return SimpleNamespace(data=[
                {**profile, "role": roles.get(profile["user_id"])}
                for profile in self.db.tables.get("profiles", [])
            ])

        raise AssertionError(f"unexpected rpc {self.name}")


class FakeAuthAdmin:
    def __init__(self, db: "FakeSupabase"):
        self.db = db

    def create_user(self, attributes: dict):
        self.db.calls.append(("create_user", "auth"))
        if ("create_user", "auth") in self.db.failures:
            raise FakeAuthError("Identity provider unavailable")
        if any(u.email == attributes["email"] for u in self.db.auth_users.values()):
            raise FakeAuthError("A user with this email address has already been registered")
        user = SimpleNamespace(id=str(uuid4()), email=attributes["email"])
        self.db.auth_users[user.id] = user
        self.db.passwords[user.email] = attributes["password"]
        return SimpleNamespace(user=user)

    def delete_user(self, user_id: str, should_soft_delete: bool = False):
        self.db.calls.append(("delete_user", "auth"))
        if ("delete_user", "auth") in self.db.failures:
            raise FakeAuthError("Identity provider unavailable")
        user = self.db.auth_users.pop(user_id)
        self.db.passwords.pop(user.email, None)
        # ON DELETE CASCADE
        for table in ("profiles", "user_roles"):
            self.db.tables[table] = [
                row for row in self.db.tables.get(table, []) if row.get("user_id") != user_id
            ]

    def sign_out(self, jwt: str, scope: str = "global"):
        self.db.revoked.add(jwt)


class FakeAuth:
    def __init__(self, db: "FakeSupabase"):
        self.db = db
        self.admin = FakeAuthAdmin(db)
        self.listeners = []

    def get_user(self, token: str):
        user_id = self.db.tokens.get(token)
        if user_id is None or user_id not in self.db.auth_users:
            raise FakeAuthError("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.db.auth_users[user_id])

    def on_auth_state_change(self, callback):
        self.listeners.append(callback)
        return SimpleNamespace(unsubscribe=lambda: self.listeners.remove(callback))

    def _notify(self, event, session):
        for callback in list(self.listeners):
            callback(event, session)

    def sign_in_with_password(self, credentials: dict):
        email, password = credentials["email"], credentials["password"]
        if self.db.passwords.get(email) != password:
            raise FakeAuthError("Invalid login credentials")
        user = next(u for u in self.db.auth_users.values() if u.email == email)
        token = self.db.token_for(user.id)
        session = SimpleNamespace(user=user, access_token=token, refresh_token=f"refresh-{user.id}")
        self._notify("SIGNED_IN", session)
        return SimpleNamespace(user=user, session=session)

    def sign_out(self):
        self._notify("SIGNED_OUT", None)


class FakeSupabase:
    """
    In-memory stand-in for a service-role supabase Client.

    `failures` holds (operation, table) pairs that should raise, e.g.
    ("insert", "profiles") or ("delete_user", "auth").
    """

    def __init__(self):
        self.tables = {}
        self.auth_users = {}
        self.passwords = {}
        self.tokens = {}
        self.revoked = set()
        self.failures = set()
        self.calls = []
        self.max_rows = 1000
        self.auth = FakeAuth(self)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict = None) -> FakeRpc:
        return FakeRpc(self, name, params or {})

    def token_for(self, user_id: str) -> str:
        token = f"token-{user_id}"
        self.tokens[token] = user_id
        return token

    def add_user(self, email, role, full_name="Test User", department="Legal", password="secret1"):
        user = self.auth.admin.create_user({"email": email, "password": password, "email_confirm": True}).user
        self.tables.setdefault("profiles", []).append({
            "id": user.id,
            "user_id": user.id,
            "full_name": full_name,
            "email": email,
            "department": department,
        })
        if role:
            self.tables.setdefault("user_roles", []).append({
                "id": str(uuid4()),
                "user_id": user.id,
                "role": role,
            })
        self.calls.clear()
        return user, self.token_for(user.id)

    def called(self, op: str, table: str) -> bool:
        return (op, table) in self.calls


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()

@pytest.fixture
async def client(fake_supabase) -> AsyncGenerator[AsyncClient, None]:
    """Test client with both Supabase clients replaced by the fake."""
    app.dependency_overrides[get_supabase_client] = lambda: fake_supabase
    app.dependency_overrides[get_anon_client] = lambda: fake_supabase
    async with LifespanManager(app):
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client
    app.dependency_overrides.clear()

@pytest.fixture
def admin(fake_supabase):
    """(user, token) for an administrator."""
    return fake_supabase.add_user("legal@lasu.edu.ng", "admin", full_name="LASU Legal Admin")

@pytest.fixture
def officer(fake_supabase):
    """(user, token) for a legal officer."""
    return fake_supabase.add_user("officer@lasu.edu.ng", "legal_officer", full_name="Adamu Johnson")
