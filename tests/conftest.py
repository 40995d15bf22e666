from __future__ import annotations

from datetime import datetime, timezone

import pytest

from classroom_attendance.container import build_container
from classroom_attendance.main import create_app
from classroom_attendance.store.memory import InMemoryDocumentStore


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def container(store):
    return build_container(store_config={"backend": "memory"}, store=store)


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def app(store, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(store=store)


@pytest.fixture
def client(app):
    return app.test_client()
