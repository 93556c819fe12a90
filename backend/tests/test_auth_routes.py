# backend/tests/test_auth_routes.py

import datetime as dt

import pytest
from bson import ObjectId

from app.core.security import create_access_token

TASK_ID = str(ObjectId())
TEST_ID = str(ObjectId())

ENDPOINTS = [
    ("GET", "/tasks", None),
    ("GET", f"/tasks/{TASK_ID}", None),
    ("POST", "/tasks", {"name": "task1", "level": 1}),
    ("PUT", f"/tasks/{TASK_ID}", {"name": "task2"}),
    ("DELETE", f"/tasks/{TASK_ID}", None),
    ("GET", f"/tasks/{TASK_ID}/tests", None),
    ("POST", f"/tasks/{TASK_ID}/tests", {"initCode": "i", "testCode": "t", "language": "java", "scoreFactor": 1}),
    ("GET", f"/tasks/{TASK_ID}/tests/{TEST_ID}", None),
    ("PUT", f"/tasks/{TASK_ID}/tests/{TEST_ID}", {"language": "scala"}),
    ("DELETE", f"/tasks/{TASK_ID}/tests/{TEST_ID}", None),
]

WRITE_ENDPOINTS = [e for e in ENDPOINTS if e[0] != "GET"]


@pytest.mark.parametrize("method,path,body", ENDPOINTS)
def test_missing_token_is_unauthenticated(client, store, method, path, body):
    r = client.request(method, path, json=body)
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Bearer"
    assert r.json()["error"]["code"] == "UNAUTHENTICATED"
    # aucune lecture/écriture du stockage avant l'authentification
    assert store.calls == []


@pytest.mark.parametrize("method,path,body", ENDPOINTS)
def test_invalid_token_is_unauthenticated(client, store, method, path, body):
    r = client.request(method, path, json=body, headers={"Authorization": "Bearer not.a.token"})
    assert r.status_code == 401
    assert store.calls == []


def test_expired_token_is_unauthenticated(client):
    token = create_access_token("foo", admin=True, expires_delta=dt.timedelta(minutes=-1))
    r = client.get("/tasks", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401


def test_non_bearer_scheme_is_unauthenticated(client):
    r = client.get("/tasks", headers={"Authorization": "Basic Zm9vOmJhcg=="})
    assert r.status_code == 401


def test_non_admin_can_read(client, user_headers):
    r = client.get("/tasks", headers=user_headers)
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.parametrize("method,path,body", WRITE_ENDPOINTS)
def test_non_admin_cannot_write(client, store, user_headers, method, path, body):
    r = client.request(method, path, json=body, headers=user_headers)
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN"
    assert store.calls == []


def test_auth_runs_before_body_validation(client, user_headers):
    r = client.post("/tasks", json={}, headers=user_headers)
    assert r.status_code == 403
    r = client.post("/tasks", json={})
    assert r.status_code == 401
