# backend/tests/test_tasks_routes.py

from bson import ObjectId


def _create(client, headers, **fields):
    r = client.post("/tasks", json=fields or {"name": "task1", "level": 1}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_list_returns_all_tasks(client, admin_headers):
    t1 = _create(client, admin_headers, name="task1", level=1)
    t2 = _create(client, admin_headers, name="task2", level=2)

    r = client.get("/tasks", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == [t1, t2]


def test_create_returns_generated_id(client, admin_headers):
    body = _create(client, admin_headers, name="task1", level=1)
    assert ObjectId.is_valid(body["id"])
    assert body == {"id": body["id"], "name": "task1", "level": 1, "unitTests": []}


def test_task_lifecycle(client, admin_headers):
    task = _create(client, admin_headers, name="task1", level=1)
    task_id = task["id"]

    r = client.get(f"/tasks/{task_id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == task

    r = client.put(f"/tasks/{task_id}", json={"name": "task2"}, headers=admin_headers)
    assert r.status_code == 200
    r = client.get(f"/tasks/{task_id}", headers=admin_headers)
    assert (r.json()["name"], r.json()["level"]) == ("task2", 1)

    r = client.delete(f"/tasks/{task_id}", headers=admin_headers)
    assert r.status_code == 204
    assert r.content == b""

    r = client.get(f"/tasks/{task_id}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"

    r = client.delete(f"/tasks/{task_id}", headers=admin_headers)
    assert r.status_code == 404


def test_create_validation_errors(client, admin_headers):
    r = client.post("/tasks", json={"level": 1}, headers=admin_headers)
    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_INPUT"
    assert any("name" in d["field"] for d in body["error"]["details"])

    r = client.post("/tasks", json={"name": "", "level": 1}, headers=admin_headers)
    assert r.status_code == 422


def test_update_with_null_is_rejected(client, admin_headers):
    task = _create(client, admin_headers)
    r = client.put(f"/tasks/{task['id']}", json={"level": None}, headers=admin_headers)
    assert r.status_code == 422


def test_unknown_and_malformed_ids_are_not_found(client, admin_headers):
    assert client.get(f"/tasks/{ObjectId()}", headers=admin_headers).status_code == 404
    assert client.get("/tasks/not-an-id", headers=admin_headers).status_code == 404
    assert client.put("/tasks/not-an-id", json={"name": "x"}, headers=admin_headers).status_code == 404


def test_malformed_stored_task_is_reported_as_storage_error(client, admin_headers, store):
    doc_id = ObjectId()
    store.collections["tasks"] = {doc_id: {"_id": doc_id, "name": "legacy", "level": "3", "unitTests": []}}

    for path in ("/tasks", f"/tasks/{doc_id}"):
        r = client.get(path, headers=admin_headers)
        assert r.status_code == 503
        assert r.json()["error"]["code"] == "STORAGE_ERROR"
