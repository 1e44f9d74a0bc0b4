"""Shared fixtures: a fresh in-memory store and a client bound to it."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from database import Store  # noqa: E402
from main import app, get_store  # noqa: E402


@pytest.fixture
def store() -> Store:
    return Store()


@pytest.fixture
def client(store: Store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
