# backend/tests/conftest.py

import os

# Settings minimales avant tout import de l'application
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STATIC_DIR", "static-does-not-exist")

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_store
from app.core.security import create_access_token
from app.main import app
from app.services.task_repository import TaskRepository
from app.services.unit_test_collection import UnitTestCollection

from .fakes import InMemoryDocumentStore


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def tasks(store) -> TaskRepository:
    return TaskRepository(store)


@pytest.fixture()
def unit_tests(tasks) -> UnitTestCollection:
    return UnitTestCollection(tasks)


@pytest.fixture()
def client(store):
    # Pas de `with` : le lifespan (client MongoDB réel) n'est pas démarré
    app.dependency_overrides[get_store] = lambda: store
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {create_access_token('foo', admin=True, uid=0)}"}


@pytest.fixture()
def user_headers() -> dict:
    return {"Authorization": f"Bearer {create_access_token('bar', admin=False, uid=1)}"}
