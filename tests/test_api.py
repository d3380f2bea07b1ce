"""
API Tests
=========
REST surface for bugs and the admin dashboard.
Each test gets its own in-memory store through a dependency override.
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from strikelog.services.bug_store import BugStore, get_bug_store


class _StepClock:
    """Naive local timestamps on 2026-10-18, one minute apart."""

    def __init__(self, start=datetime(2026, 10, 18, 10, 0)):
        self.now = start

    def __call__(self):
        current = self.now
        self.now += timedelta(minutes=1)
        return current


@pytest.fixture
def store():
    return BugStore(clock=_StepClock())


@pytest.fixture
def client(store):
    from main import app
    app.dependency_overrides[get_bug_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def _submit(client, **fields):
    payload = {"title": "Login button broken", **fields}
    resp = client.post("/api/bugs", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ===================================================================
# Health
# ===================================================================
def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ===================================================================
# Bugs CRUD
# ===================================================================
class TestBugEndpoints:

    def test_list_empty(self, client):
        resp = client.get("/api/bugs")
        assert resp.status_code == 200
        assert resp.json() == []

    def test_create_applies_defaults(self, client):
        bug = _submit(client, reporter="alice")
        assert bug["severity"] == "Medium"
        assert bug["status"] == "Open"
        assert bug["affectedFile"] == "No file specified"
        assert bug["reporter"] == "alice"
        assert bug["closedAt"] is None
        assert "createdAt" in bug
        assert len(bug["id"]) == 24

    def test_create_accepts_camel_case_fields(self, client):
        bug = _submit(client, affectedFile="src/App.js", fileUrl="http://files/1")
        assert bug["affectedFile"] == "src/App.js"
        assert bug["fileUrl"] == "http://files/1"

    @pytest.mark.parametrize("payload", [
        {"title": "x", "severity": "Catastrophic"},
        {"title": "x", "status": "Done"},
        {"title": ""},
        {"description": "no title"},
    ])
    def test_create_rejects_invalid_payload(self, client, payload):
        resp = client.post("/api/bugs", json=payload)
        assert resp.status_code == 422

    def test_list_is_newest_first(self, client):
        first = _submit(client, title="first")
        second = _submit(client, title="second")
        ids = [b["id"] for b in client.get("/api/bugs").json()]
        assert ids == [second["id"], first["id"]]

    def test_get_one_and_unknown(self, client):
        bug = _submit(client)
        assert client.get(f"/api/bugs/{bug['id']}").json()["title"] == bug["title"]
        assert client.get("/api/bugs/does-not-exist").status_code == 404

    def test_patch_status_lifecycle(self, client):
        bug = _submit(client)
        url = f"/api/bugs/{bug['id']}"

        assert client.patch(url, json={"status": "In Progress"}).json()["status"] == "In Progress"
        assert client.patch(url, json={"status": "Resolved"}).json()["status"] == "Resolved"

        closed = client.patch(url, json={"status": "Closed"}).json()
        assert closed["status"] == "Closed"
        assert closed["closedAt"] is not None

        reopened = client.patch(url, json={"status": "In Progress"}).json()
        assert reopened["status"] == "In Progress"
        assert reopened["closedAt"] is None

    def test_patch_close_from_open_conflicts(self, client):
        bug = _submit(client)
        resp = client.patch(f"/api/bugs/{bug['id']}", json={"status": "Closed"})
        assert resp.status_code == 409
        assert "not allowed" in resp.json()["detail"]

    def test_patch_invalid_status_rejected(self, client):
        bug = _submit(client)
        resp = client.patch(f"/api/bugs/{bug['id']}", json={"status": "Done"})
        assert resp.status_code == 422

    def test_patch_unknown_bug(self, client):
        resp = client.patch("/api/bugs/missing", json={"status": "Open"})
        assert resp.status_code == 404

    def test_delete(self, client, store):
        bug = _submit(client)
        resp = client.delete(f"/api/bugs/{bug['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"message": "Deleted"}
        assert len(store) == 0
        assert client.delete(f"/api/bugs/{bug['id']}").status_code == 404


# ===================================================================
# Dashboard
# ===================================================================
class TestDashboardEndpoints:

    @pytest.fixture
    def seeded(self, client):
        low = _submit(client, title="low", severity="Low")
        blocker = _submit(client, title="blocker", severity="Blocker")
        medium = _submit(client, title="medium", severity="Medium")
        url = f"/api/bugs/{blocker['id']}"
        client.patch(url, json={"status": "Resolved"})
        client.patch(url, json={"status": "Closed"})
        return {"low": low, "blocker": blocker, "medium": medium}

    def test_empty_dashboard(self, client):
        data = client.get("/api/dashboard", params={"reference_date": "2026-10-18"}).json()
        assert data["stats"] == {
            "open": 0, "inProgress": 0, "closed": 0, "critical": 0, "total": 0,
        }
        assert data["active"] == []
        assert data["completed"] == []
        assert len(data["weekly"]) == 7
        assert [e["value"] for e in data["severity"]] == [0, 0, 0, 0, 0]
        assert data["sort"] == {"key": None, "direction": "desc"}

    def test_stats_and_split(self, client, seeded):
        data = client.get("/api/dashboard", params={"reference_date": "2026-10-18"}).json()
        assert data["stats"]["open"] == 2
        assert data["stats"]["closed"] == 1
        assert data["stats"]["critical"] == 1
        assert data["stats"]["total"] == 3
        assert [b["title"] for b in data["completed"]] == ["blocker"]
        assert "createdAt" in data["active"][0]
        assert "affectedFile" in data["completed"][0]
        # store order: newest first
        assert [b["title"] for b in data["active"]] == ["medium", "low"]

    def test_weekly_counts_today(self, client, seeded):
        data = client.get("/api/dashboard", params={"reference_date": "2026-10-18"}).json()
        today = data["weekly"][-1]
        assert today["date"] == "2026-10-18"
        assert today["label"] == "Oct 18"
        assert today["submitted"] == 3
        assert today["resolved"] == 1

    def test_toggle_sort_on_severity(self, client, seeded):
        first = client.get("/api/dashboard", params={"toggle": "severity"}).json()
        assert first["sort"] == {"key": "severity", "direction": "desc"}
        assert [b["severity"] for b in first["active"]] == ["Medium", "Low"]

        second = client.get("/api/dashboard", params={
            "sort_key": "severity", "direction": "desc", "toggle": "severity",
        }).json()
        assert second["sort"] == {"key": "severity", "direction": "asc"}
        assert [b["severity"] for b in second["active"]] == ["Low", "Medium"]

    def test_invalid_resolved_by_is_bad_request(self, client):
        resp = client.get("/api/dashboard", params={"resolved_by": "whenever"})
        assert resp.status_code == 400

    def test_invalid_direction_is_unprocessable(self, client):
        resp = client.get("/api/dashboard", params={"direction": "sideways"})
        assert resp.status_code == 422

    def test_weekly_panel(self, client, seeded):
        resp = client.get("/api/dashboard/weekly", params={"reference_date": "2026-10-24"})
        series = resp.json()
        assert len(series) == 7
        assert series[0]["date"] == "2026-10-18"
        assert series[0]["submitted"] == 3

    def test_weekly_panel_outside_window(self, client, seeded):
        series = client.get("/api/dashboard/weekly", params={"reference_date": "2026-10-25"}).json()
        assert sum(b["submitted"] for b in series) == 0

    def test_severity_panel(self, client, seeded):
        histogram = client.get("/api/dashboard/severity").json()
        assert histogram == [
            {"name": "Blocker", "value": 1},
            {"name": "Critical", "value": 0},
            {"name": "High", "value": 0},
            {"name": "Medium", "value": 1},
            {"name": "Low", "value": 1},
        ]
