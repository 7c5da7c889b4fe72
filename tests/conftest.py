"""In-memory stand-in for the Supabase client: tables, auth and storage."""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.database.supabase_client import get_auth_supabase, get_supabase
from app.main import app

ADMIN_ID = "u-admin"
MEMBER_ID = "u-member"
OTHER_ID = "u-other"

ADMIN_HEADERS = {"Authorization": "Bearer admin-token"}
MEMBER_HEADERS = {"Authorization": "Bearer member-token"}
OTHER_HEADERS = {"Authorization": "Bearer other-token"}

UNIQUE_KEYS = {"document_permissions": ("document_id", "user_id")}
TIMESTAMP_COLUMN = {
    "profiles": "created_at",
    "documents": "created_at",
    "document_permissions": "granted_at",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_n = None
        self.cardinality = None

    def select(self, columns="*"):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, rows):
        self.op = "insert"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def single(self):
        self.cardinality = "single"
        return self

    def maybe_single(self):
        self.cardinality = "maybe_single"
        return self

    def _project(self, row):
        if self.columns.strip() == "*":
            return dict(row)
        return {c.strip(): row.get(c.strip()) for c in self.columns.split(",")}

    def execute(self):
        self.db.calls.append((self.table, self.op))
        if self.table in self.db.failing_tables:
            raise APIError({"message": self.db.failing_tables[self.table], "code": "PGRST000"})
        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "insert":
            return FakeResponse([self.db.insert_row(self.table, dict(r)) for r in self.payload])

        matched = [r for r in rows if all(f(r) for f in self.filters)]
        if self.op == "delete":
            self.db.tables[self.table] = [r for r in rows if r not in matched]
            return FakeResponse([dict(r) for r in matched])

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        if self.limit_n is not None:
            matched = matched[:self.limit_n]
        data = [self._project(r) for r in matched]

        if self.cardinality == "single":
            if len(data) != 1:
                raise APIError({"message": "JSON object requested, multiple (or no) rows returned",
                                "code": "PGRST116"})
            return FakeResponse(data[0])
        if self.cardinality == "maybe_single":
            return FakeResponse(data[0] if data else None)
        return FakeResponse(data)


class FakeAuthAdmin:
    def __init__(self, auth: "FakeAuth"):
        self.auth = auth

    def sign_out(self, jwt, scope="global"):
        self.auth.calls.append(("admin.sign_out", jwt))


class FakeAuth:
    def __init__(self):
        self.tokens = {}
        self.passwords = {}
        self.calls = []
        self.admin = FakeAuthAdmin(self)

    def add_user(self, user_id, email, token, password="secret123"):
        user = SimpleNamespace(id=user_id, email=email, user_metadata={}, app_metadata={},
                               created_at=_now())
        self.tokens[token] = user
        self.passwords[email] = (password, token)
        return user

    def get_user(self, jwt=None):
        self.calls.append("get_user")
        user = self.tokens.get(jwt)
        if user is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=user)

    def sign_in_with_password(self, credentials):
        self.calls.append("sign_in_with_password")
        stored = self.passwords.get(credentials["email"])
        if stored is None or stored[0] != credentials["password"]:
            raise Exception("Invalid login credentials")
        token = stored[1]
        return SimpleNamespace(user=self.tokens[token], session=SimpleNamespace(access_token=token))

    def sign_out(self):
        self.calls.append("sign_out")


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def list(self, path=None, options=None):
        self.storage.calls.append(("list", self.name, path, options))
        if self.storage.fail:
            raise Exception("storage unavailable")
        entries = sorted(self.storage.entries(self.name), key=lambda e: e["name"])
        limit = (options or {}).get("limit", 100)
        return entries[:limit]

    def download(self, path):
        self.storage.calls.append(("download", self.name, path))
        blob = self.storage.buckets.get(self.name, {}).get(path)
        if blob is None:
            raise Exception("Object not found")
        return blob[0]


class FakeStorage:
    def __init__(self):
        self.buckets = {}
        self.placeholders = {}
        self.calls = []
        self.fail = False

    def put(self, bucket, name, content, mimetype="application/octet-stream"):
        self.buckets.setdefault(bucket, {})[name] = (content, mimetype)

    def add_placeholder(self, bucket, name):
        self.placeholders.setdefault(bucket, []).append(name)

    def entries(self, bucket):
        result = []
        for name, (content, mimetype) in self.buckets.get(bucket, {}).items():
            result.append({
                "name": name,
                "id": f"obj-{name}",
                "created_at": _now(),
                "updated_at": _now(),
                "metadata": {"size": len(content), "mimetype": mimetype},
            })
        for name in self.placeholders.get(bucket, []):
            result.append({"name": name, "id": None, "metadata": None})
        return result

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeSupabase:
    def __init__(self):
        self.tables = {"profiles": [], "documents": [], "document_permissions": []}
        self.calls = []
        self.failing_tables = {}
        self.auth = FakeAuth()
        self.storage = FakeStorage()

    def table(self, name):
        return FakeQuery(self, name)

    def insert_row(self, table, row):
        unique = UNIQUE_KEYS.get(table)
        if unique and any(all(r.get(k) == row.get(k) for k in unique) for r in self.tables[table]):
            raise APIError({
                "message": f'duplicate key value violates unique constraint "{table}_unique"',
                "code": "23505",
                "details": "Key already exists.",
                "hint": None,
            })
        row.setdefault("id", str(uuid4()))
        column = TIMESTAMP_COLUMN.get(table)
        if column:
            row.setdefault(column, _now())
        self.tables.setdefault(table, []).append(row)
        return dict(row)

    def calls_to(self, table, op=None):
        return [c for c in self.calls if c[0] == table and (op is None or c[1] == op)]


def add_profile(fake, user_id, email, role="member", full_name=None, created_at=None):
    return fake.insert_row("profiles", {
        "id": user_id,
        "email": email,
        "full_name": full_name,
        "role": role,
        "created_at": created_at or _now(),
    })


def add_document(fake, title, owner_id=ADMIN_ID, created_at=None, **fields):
    row = {"title": title, "owner_id": owner_id, "content": None, "file_path": None,
           "file_name": None, "file_size": None, "file_type": None, **fields}
    if created_at:
        row["created_at"] = created_at
    return fake.insert_row("documents", row)


def add_permission(fake, document_id, user_id, can_view=True):
    return fake.insert_row("document_permissions", {
        "document_id": document_id, "user_id": user_id, "can_view": can_view, "can_edit": False,
    })


@pytest.fixture
def fake_supabase():
    fake = FakeSupabase()
    add_profile(fake, ADMIN_ID, "admin@example.com", role="admin", full_name="Admin",
                created_at="2024-01-01T00:00:00+00:00")
    add_profile(fake, MEMBER_ID, "member@example.com", full_name="Mia Member",
                created_at="2024-01-02T00:00:00+00:00")
    add_profile(fake, OTHER_ID, "other@example.com", created_at="2024-01-03T00:00:00+00:00")
    fake.auth.add_user(ADMIN_ID, "admin@example.com", "admin-token", password="Admin123456")
    fake.auth.add_user(MEMBER_ID, "member@example.com", "member-token")
    fake.auth.add_user(OTHER_ID, "other@example.com", "other-token")
    return fake


@pytest.fixture
def client(fake_supabase):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_auth_supabase] = lambda: fake_supabase
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
