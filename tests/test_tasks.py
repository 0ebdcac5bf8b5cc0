"""
End-to-end tests of the task routes against the SQLite test database.
"""

from datetime import datetime

from factories import AUTH_HEADERS, make_task


def create(client, **payload):
    return client.post("/tasks", json=payload, headers=AUTH_HEADERS)


def test_create_task(client):
    """Test creating a task"""
    response = create(client, title="Test Task", description="Test Description")
    assert response.status_code == 201
    body = response.json()
    assert body["status"] is True
    data = body["data"]
    assert data["title"] == "Test Task"
    assert data["description"] == "Test Description"
    assert data["status"] == "pending"
    assert isinstance(data["id"], str)
    assert "created_at" in data
    assert "updated_at" in data
    assert "is_deleted" not in data


def test_create_task_without_description(client):
    response = create(client, title="Test Task")
    assert response.status_code == 201
    assert response.json()["data"]["description"] is None


def test_create_task_validation_error(client):
    response = create(client, description="x")
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert body["details"][0]["path"] == ["title"]
    assert "success" not in body


def test_read_tasks_empty(client):
    """Test reading tasks when database is empty"""
    response = client.get("/tasks", headers=AUTH_HEADERS)
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": []}


def test_read_tasks_newest_first(client, db_session):
    db_session.add_all([
        make_task(title="Task 1", created_at=datetime(2024, 1, 1)),
        make_task(title="Task 3", created_at=datetime(2024, 1, 3)),
        make_task(title="Task 2", created_at=datetime(2024, 1, 2)),
    ])
    db_session.commit()

    response = client.get("/tasks", headers=AUTH_HEADERS)
    assert response.status_code == 200
    data = response.json()["data"]
    assert [t["title"] for t in data] == ["Task 3", "Task 2", "Task 1"]


def test_read_task(client):
    """Test reading a specific task"""
    task_id = create(client, title="Task 1", description="Desc 1").json()["data"]["id"]

    response = client.get(f"/tasks/{task_id}", headers=AUTH_HEADERS)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["id"] == task_id
    assert body["data"]["title"] == "Task 1"


def test_read_task_not_found(client):
    """Test reading a non-existent task"""
    response = client.get("/tasks/9999", headers=AUTH_HEADERS)
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Task not found"}


def test_update_task_status(client):
    """Test updating the status of a task"""
    task_id = create(client, title="Original Title", description="Original Desc").json()["data"]["id"]

    response = client.patch(f"/tasks/{task_id}", json={"status": "completed"}, headers=AUTH_HEADERS)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "completed"
    assert data["title"] == "Original Title"
    assert data["description"] == "Original Desc"  # Should remain unchanged

    fetched = client.get(f"/tasks/{task_id}", headers=AUTH_HEADERS).json()["data"]
    assert fetched["status"] == "completed"


def test_update_task_not_found(client):
    """Test updating a non-existent task"""
    response = client.patch("/tasks/9999", json={"status": "completed"}, headers=AUTH_HEADERS)
    assert response.status_code == 404
    assert response.json()["error"] == "Task not found"


def test_delete_task(client):
    """Test soft-deleting a task"""
    task_id = create(client, title="Task to Delete", description="Will be deleted").json()["data"]["id"]
    client.patch(f"/tasks/{task_id}", json={"status": "in-progress"}, headers=AUTH_HEADERS)

    response = client.delete(f"/tasks/{task_id}", headers=AUTH_HEADERS)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["id"] == task_id
    assert body["data"]["status"] == "in-progress"
    assert "is_deleted" not in body["data"]

    # Verify it is gone from every route
    assert client.get(f"/tasks/{task_id}", headers=AUTH_HEADERS).status_code == 404
    assert client.get("/tasks", headers=AUTH_HEADERS).json()["data"] == []
    patch = client.patch(f"/tasks/{task_id}", json={"status": "completed"}, headers=AUTH_HEADERS)
    assert patch.status_code == 404


def test_delete_task_twice(client):
    """Deleting again is not found, not a repeated success"""
    task_id = create(client, title="Task").json()["data"]["id"]

    assert client.delete(f"/tasks/{task_id}", headers=AUTH_HEADERS).status_code == 200
    response = client.delete(f"/tasks/{task_id}", headers=AUTH_HEADERS)
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Task not found"}


def test_delete_task_not_found(client):
    """Test deleting a non-existent task"""
    response = client.delete("/tasks/9999", headers=AUTH_HEADERS)
    assert response.status_code == 404
