# tests/conftest.py
"""Shared fixtures: handler modules loaded by path and an in-memory notes pool."""
import importlib.util
import itertools
import json
import os
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from notes_shared import config, notes

TEST_SECRET_ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:notes-db"
_lambdas_dir = os.path.join(os.path.dirname(__file__), "..", "app", "lambdas")


def load_lambda(name):
    # Use importlib to avoid module name collisions between handler.py files
    spec = importlib.util.spec_from_file_location(f"{name}_handler", os.path.join(_lambdas_dir, name, "handler.py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


with patch.dict(os.environ, {"DB_SECRET_ARN": TEST_SECRET_ARN}):
    HANDLERS = {name: load_lambda(name) for name in ("create_note", "list_notes", "delete_note")}


class FakeCursor:
    def __init__(self, rows):
        self._rows = rows

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    """Understands exactly the statements in notes_shared.notes."""

    def __init__(self, pool):
        self.pool = pool

    def execute(self, query, params):
        self.pool.statements.append((query, params))
        if query == notes.INSERT_NOTE:
            return FakeCursor([self.pool.insert(*params)])
        if query == notes.SELECT_NOTES:
            return FakeCursor(self.pool.select(*params))
        if query == notes.DELETE_NOTE:
            return FakeCursor(self.pool.delete(*params))
        raise AssertionError(f"unexpected SQL: {query}")


class FakePool:
    """Stand-in for psycopg_pool.ConnectionPool backed by a list of rows."""

    def __init__(self):
        self.rows = []
        self.statements = []
        self.checkouts = 0
        self._ticks = itertools.count(1)
        self._epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self):
        return self._epoch + timedelta(seconds=next(self._ticks))

    @contextmanager
    def connection(self, timeout=None):
        self.checkouts += 1
        yield FakeConnection(self)

    @staticmethod
    def _public(row):
        return {k: row[k] for k in ("id", "title", "content", "created_at", "updated_at")}

    def insert(self, user_id, title, content):
        now = self._now()
        row = {"id": uuid.uuid4(), "user_id": user_id, "title": title, "content": content,
               "created_at": now, "updated_at": now}
        self.rows.append(row)
        return self._public(row)

    def select(self, user_id):
        owned = [r for r in self.rows if r["user_id"] == user_id]
        return [self._public(r) for r in sorted(owned, key=lambda r: r["updated_at"], reverse=True)]

    def delete(self, note_id, user_id):
        for row in self.rows:
            if str(row["id"]) == str(note_id) and row["user_id"] == user_id:
                self.rows.remove(row)
                return [{"id": row["id"]}]
        return []

    def touch(self, note_id):
        """Simulate the updated_at trigger firing for an edit."""
        for row in self.rows:
            if str(row["id"]) == str(note_id):
                row["updated_at"] = self._now()


def make_event(sub="user-alice", body=None, note_id=None):
    event = {
        "requestContext": {"authorizer": {"claims": {"sub": sub}} if sub else {}},
        "pathParameters": {"id": note_id} if note_id else None,
    }
    if body is not None:
        event["body"] = body if isinstance(body, str) else json.dumps(body)
    return event


def body_of(result):
    return json.loads(result["body"])


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Settings are read once per process; each test starts unread."""
    monkeypatch.setattr(config, "_settings", None)


@pytest.fixture
def fake_pool():
    return FakePool()


def _patched(name, pool):
    return patch.object(HANDLERS[name], "get_pool", return_value=pool)


@pytest.fixture
def create_note(fake_pool):
    with _patched("create_note", fake_pool):
        yield HANDLERS["create_note"]


@pytest.fixture
def list_notes(fake_pool):
    with _patched("list_notes", fake_pool):
        yield HANDLERS["list_notes"]


@pytest.fixture
def delete_note(fake_pool):
    with _patched("delete_note", fake_pool):
        yield HANDLERS["delete_note"]
