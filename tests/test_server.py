"""
Tests for the HTTP layer: status codes, payload shapes, credential hiding.
"""
from datetime import datetime, timedelta, timezone

from taskdash.config import Config
from taskdash.stats import TaskStats
from taskdash.store import MemStorage
from taskdash_server import create_app

NEW_TASK = {
    "title": "X",
    "description": "Y",
    "priority": "Low",
    "dueDate": "Jan 1, 2025",
}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# User
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestUserRoutes:

    def test_get_user_hides_password(self, client):
        resp = client.get("/api/user")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["id"] == 1
        assert data["name"] == "Avinash"
        assert "password" not in data

    def test_patch_user(self, client):
        resp = client.patch("/api/user", json={"name": "New Name"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["name"] == "New Name"
        assert data["email"] == "avinash@example.com"
        assert data["joinDate"] == "Jan 2024"
        assert "password" not in data

    def test_patch_user_invalid(self, client):
        resp = client.patch("/api/user", json={"password": "x"})
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["message"] == "Invalid data"
        assert body["errors"][0]["field"] == "password"

    def test_user_not_found(self):
        app = create_app(MemStorage(seed=False), Config())
        client = app.test_client()
        assert client.get("/api/user").status_code == 404
        assert client.patch("/api/user", json={"name": "x"}).status_code == 404


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tasks
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestTaskRoutes:

    def test_list_tasks(self, client):
        resp = client.get("/api/tasks")
        assert resp.status_code == 200
        tasks = resp.get_json()
        assert [t["id"] for t in tasks] == [1, 2, 3, 4]
        assert tasks[0]["userId"] == 1
        assert tasks[0]["dueDate"] == "Dec 28, 2024"
        assert tasks[0]["createdAt"].startswith("2024-12-20")

    def test_list_tasks_empty(self):
        client = create_app(MemStorage(seed=False), Config()).test_client()
        assert client.get("/api/tasks").get_json() == []

    def test_list_tasks_filtered(self, client):
        resp = client.get("/api/tasks?priority=medium&status=pending")
        assert [t["id"] for t in resp.get_json()] == [3]
        resp = client.get("/api/tasks?q=documentation")
        assert [t["id"] for t in resp.get_json()] == [4]

    def test_list_tasks_bad_filter(self, client):
        resp = client.get("/api/tasks?status=archived&priority=urgent")
        assert resp.status_code == 400
        assert {e["field"] for e in resp.get_json()["errors"]} == {"status", "priority"}

    def test_create_task(self, client):
        before = datetime.now(timezone.utc)
        resp = client.post("/api/tasks", json=NEW_TASK)
        assert resp.status_code == 201
        task = resp.get_json()
        assert task["id"] == 5
        assert task["userId"] == 1
        assert task["completed"] is False
        created = datetime.fromisoformat(task["createdAt"])
        assert abs(created - before) < timedelta(seconds=5)

    def test_create_task_missing_fields(self, client):
        resp = client.post("/api/tasks", json={"title": "X"})
        assert resp.status_code == 400
        fields = {e["field"] for e in resp.get_json()["errors"]}
        assert fields == {"description", "priority", "dueDate"}

    def test_create_task_malformed_body(self, client):
        resp = client.post("/api/tasks", data="{not json", content_type="application/json")
        assert resp.status_code == 400

    def test_get_task(self, client):
        assert client.get("/api/tasks/2").get_json()["completed"] is True
        assert client.get("/api/tasks/99").status_code == 404

    def test_patch_task(self, client):
        resp = client.patch("/api/tasks/1", json={"completed": True})
        assert resp.status_code == 200
        task = resp.get_json()
        assert task["completed"] is True
        assert task["title"] == "Complete project wireframes"
        assert task["createdAt"].startswith("2024-12-20")

    def test_patch_task_not_found(self, client):
        resp = client.patch("/api/tasks/99", json={"title": "x"})
        assert resp.status_code == 404
        assert resp.get_json() == {"message": "Task not found"}

    def test_patch_task_invalid(self, client):
        resp = client.patch("/api/tasks/1", json={"priority": "Urgent"})
        assert resp.status_code == 400

    def test_delete_task(self, client):
        resp = client.delete("/api/tasks/4")
        assert resp.status_code == 204
        assert resp.data == b""
        assert client.get("/api/tasks/4").status_code == 404
        assert client.delete("/api/tasks/4").status_code == 404

    def test_non_numeric_id(self, client):
        resp = client.get("/api/tasks/abc")
        assert resp.status_code == 404
        assert "message" in resp.get_json()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Derived views
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_stats(client):
    data = client.get("/api/stats").get_json()
    assert data["totalTasks"] == 4
    assert data["completedTasks"] == 1
    assert data["pendingTasks"] == 3
    assert set(data) == {"totalTasks", "completedTasks", "pendingTasks", "thisWeekTasks"}


def test_stats_count_new_task_this_week(client):
    before = client.get("/api/stats").get_json()["thisWeekTasks"]
    client.post("/api/tasks", json=NEW_TASK)
    data = client.get("/api/stats").get_json()
    assert data["totalTasks"] == 5
    assert data["pendingTasks"] == 4
    assert data["thisWeekTasks"] == before + 1


def test_reports(client):
    client.post("/api/tasks", json=dict(NEW_TASK, completed=True))
    resp = client.get("/api/reports?period=week")
    assert resp.status_code == 200
    report = resp.get_json()
    assert report["periodName"] == "This Week"
    assert report["totalTasks"] >= 1
    assert client.get("/api/reports?period=decade").status_code == 400


def test_calendar(client):
    resp = client.get("/api/calendar?year=2024&month=12")
    assert resp.status_code == 200
    view = resp.get_json()
    assert view["daysInMonth"] == 31
    assert sorted(view["days"]) == ["25", "28", "30"]


def test_calendar_defaults_to_current_month(client):
    now = datetime.now(timezone.utc)
    view = client.get("/api/calendar").get_json()
    assert view["year"] == now.year
    assert view["month"] == now.month


def test_calendar_bad_params(client):
    assert client.get("/api/calendar?month=13").status_code == 400
    assert client.get("/api/calendar?year=abc").status_code == 400


def test_health(client):
    assert client.get("/health").get_json()["status"] == "ok"


def test_unexpected_error_is_generic(store):
    class BrokenStore(MemStorage):
        def get_tasks(self, user_id):
            raise RuntimeError("secret internals")

    client = create_app(BrokenStore(), Config()).test_client()
    resp = client.get("/api/tasks")
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Internal server error"}
    assert b"secret" not in resp.data


def test_apps_do_not_share_state():
    a = create_app(MemStorage(), Config()).test_client()
    b = create_app(MemStorage(), Config()).test_client()
    a.delete("/api/tasks/1")
    assert a.get("/api/tasks/1").status_code == 404
    assert b.get("/api/tasks/1").status_code == 200


def test_stats_go_through_storage_contract():
    class CountingStore(MemStorage):
        def get_task_stats(self, user_id):
            return TaskStats(99, 0, 99, 0)

    client = create_app(CountingStore(), Config()).test_client()
    data = client.get("/api/stats").get_json()
    assert data["totalTasks"] == 99
    assert data["pendingTasks"] == 99


def test_priority_filter_all_any_case(client):
    for value in ("all", "All", "ALL"):
        resp = client.get(f"/api/tasks?priority={value}")
        assert resp.status_code == 200
        assert len(resp.get_json()) == 4


def test_goals(client):
    client.post("/api/tasks", json=dict(NEW_TASK, completed=True))
    resp = client.get("/api/goals?type=daily&target=2")
    assert resp.status_code == 200
    goal = resp.get_json()
    assert goal["type"] == "daily"
    assert goal["completed"] == 1
    assert goal["percentage"] == 50
    assert goal["isAchieved"] is False


def test_goals_defaults(client):
    goal = client.get("/api/goals").get_json()
    assert goal["type"] == "daily"
    assert goal["target"] == 3


def test_goals_bad_params(client):
    resp = client.get("/api/goals?type=yearly&target=-1")
    assert resp.status_code == 400
    assert {e["field"] for e in resp.get_json()["errors"]} == {"type", "target"}
    assert client.get("/api/goals?target=lots").status_code == 400
