from datetime import datetime

import pytest
from sqlalchemy import update

from teamtasker.domain.models.task import Task


def create_task(owner, team_id, **fields):
    payload = {"title": "Fix bug", "team_id": team_id}
    payload.update(fields)
    return owner.client.post("/tasks", json=payload)


@pytest.fixture
def bob_in_eng(alice, bob, eng_team):
    resp = alice.client.post(f"/teams/{eng_team['id']}/members", json={"email": "bob@example.com"})
    assert resp.status_code == 201
    return bob


def test_create_and_fetch_round_trip(alice, eng_team):
    """Scenario A: defaults apply and the owner can read the task back."""
    resp = create_task(alice, eng_team["id"])
    assert resp.status_code == 201
    created = resp.json()["task"]
    assert created["status"] == "todo"
    assert created["assigned_to"] is None
    assert created["team_name"] == "Eng"

    fetched = alice.client.get(f"/tasks/{created['id']}").json()["task"]
    assert fetched["title"] == "Fix bug"
    assert fetched["description"] is None
    assert fetched["status"] == "todo"
    assert fetched["team_id"] == eng_team["id"]
    assert fetched["created_at"] is not None
    assert fetched["updated_at"] is not None


def test_create_with_all_fields(alice, eng_team):
    resp = create_task(
        alice,
        eng_team["id"],
        title="  Ship release  ",
        description="Cut the tag",
        status="in-progress",
        assigned_to=alice.user["id"],
        due_date="2030-01-15T10:00:00",
    )

    assert resp.status_code == 201
    task = resp.json()["task"]
    assert task["title"] == "Ship release"
    assert task["description"] == "Cut the tag"
    assert task["status"] == "in-progress"
    assert task["assigned_to"] == alice.user["id"]
    assert task["assigned_to_name"] == "Alice"
    assert task["assigned_to_email"] == "alice@example.com"
    assert task["due_date"].startswith("2030-01-15T10:00:00")


def test_unrelated_user_cannot_see_task(alice, bob, eng_team):
    task = create_task(alice, eng_team["id"]).json()["task"]

    assert bob.client.get(f"/tasks/{task['id']}").status_code == 404
    assert bob.client.get("/tasks").json()["tasks"] == []
    assert bob.client.get("/tasks", params={"team_id": eng_team["id"]}).json()["tasks"] == []


def test_hidden_and_missing_tasks_look_the_same(alice, bob, eng_team):
    task = create_task(alice, eng_team["id"]).json()["task"]

    hidden = bob.client.put(f"/tasks/{task['id']}", json={"status": "completed"})
    missing = bob.client.put("/tasks/99999", json={"status": "completed"})

    assert hidden.status_code == missing.status_code == 404
    assert hidden.json()["error"]["message"] == missing.json()["error"]["message"]
    assert bob.client.delete(f"/tasks/{task['id']}").status_code == 404


def test_create_in_foreign_team_is_forbidden(alice, bob, eng_team):
    resp = create_task(bob, eng_team["id"])

    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "Access denied to this team"


def test_assignee_must_belong_to_team_on_create(alice, bob, eng_team):
    resp = create_task(alice, eng_team["id"], assigned_to=bob.user["id"])

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Assigned user must be a team member"
    assert resp.json()["error"]["details"] == {"assigned_to": bob.user["id"], "team_id": eng_team["id"]}


def test_assignee_must_belong_to_team_on_update(alice, bob, eng_team):
    task = create_task(alice, eng_team["id"]).json()["task"]

    resp = alice.client.put(f"/tasks/{task['id']}", json={"assigned_to": bob.user["id"]})

    assert resp.status_code == 400
    assert alice.client.get(f"/tasks/{task['id']}").json()["task"]["assigned_to"] is None


def test_member_and_owner_are_valid_assignees(alice, bob_in_eng, eng_team):
    to_member = create_task(alice, eng_team["id"], assigned_to=bob_in_eng.user["id"])
    to_owner = create_task(bob_in_eng, eng_team["id"], assigned_to=alice.user["id"])

    assert to_member.status_code == 201
    assert to_owner.status_code == 201


def test_partial_update_changes_only_supplied_fields(alice, eng_team):
    task = create_task(alice, eng_team["id"], description="Details", status="todo").json()["task"]

    resp = alice.client.put(f"/tasks/{task['id']}", json={"status": "completed"})

    assert resp.status_code == 200
    updated = resp.json()["task"]
    assert updated["status"] == "completed"
    assert updated["title"] == "Fix bug"
    assert updated["description"] == "Details"
    assert updated["updated_at"] is not None


def test_update_refreshes_updated_at(alice, eng_team, db):
    task = create_task(alice, eng_team["id"]).json()["task"]
    stale = datetime(2000, 1, 1)
    db.execute(update(Task).where(Task.id == task["id"]).values(updated_at=stale))
    db.commit()

    resp = alice.client.put(f"/tasks/{task['id']}", json={"title": "Fix bug properly"})

    assert resp.status_code == 200
    refreshed = datetime.fromisoformat(resp.json()["task"]["updated_at"])
    assert refreshed.replace(tzinfo=None) > stale


def test_explicit_null_unassigns(alice, eng_team):
    task = create_task(alice, eng_team["id"], assigned_to=alice.user["id"]).json()["task"]

    resp = alice.client.put(f"/tasks/{task['id']}", json={"assigned_to": None})

    assert resp.status_code == 200
    assert resp.json()["task"]["assigned_to"] is None


def test_status_moves_freely(alice, eng_team):
    task = create_task(alice, eng_team["id"], status="completed").json()["task"]

    for status in ("todo", "completed", "in-progress", "todo"):
        resp = alice.client.put(f"/tasks/{task['id']}", json={"status": status})
        assert resp.json()["task"]["status"] == status


@pytest.mark.parametrize(
    "payload, field",
    [
        ({"title": ""}, "title"),
        ({"title": "x" * 256}, "title"),
        ({"description": "x" * 1001}, "description"),
        ({"status": "blocked"}, "status"),
        ({"due_date": "not-a-date"}, "due_date"),
        ({"team_id": "abc"}, "team_id"),
    ],
)
def test_create_validation_errors(alice, eng_team, payload, field):
    body = {"title": "Fix bug", "team_id": eng_team["id"]}
    body.update(payload)

    resp = alice.client.post("/tasks", json=body)

    assert resp.status_code == 400
    assert field in {e["field"] for e in resp.json()["errors"]}


def test_create_requires_team(alice):
    resp = alice.client.post("/tasks", json={"title": "Orphan"})

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "team_id"


@pytest.mark.parametrize("field", ["title", "status"])
def test_update_rejects_null_for_required_fields(alice, eng_team, field):
    task = create_task(alice, eng_team["id"]).json()["task"]

    resp = alice.client.put(f"/tasks/{task['id']}", json={field: None})

    assert resp.status_code == 400


def test_member_can_update_and_delete_team_tasks(alice, bob_in_eng, eng_team):
    task = create_task(alice, eng_team["id"]).json()["task"]

    resp = bob_in_eng.client.put(f"/tasks/{task['id']}", json={"title": "Fixed by Bob"})
    assert resp.status_code == 200
    assert resp.json()["task"]["title"] == "Fixed by Bob"

    assert bob_in_eng.client.delete(f"/tasks/{task['id']}").status_code == 200
    assert alice.client.get(f"/tasks/{task['id']}").status_code == 404


def test_removed_member_stays_assigned(alice, bob_in_eng, eng_team):
    """Scenario C: removing a member does not unassign their tasks."""
    task = create_task(alice, eng_team["id"], assigned_to=bob_in_eng.user["id"]).json()["task"]

    resp = alice.client.delete(f"/teams/{eng_team['id']}/members/{bob_in_eng.user['id']}")
    assert resp.status_code == 200

    refetched = alice.client.get(f"/tasks/{task['id']}").json()["task"]
    assert refetched["assigned_to"] == bob_in_eng.user["id"]
    assert bob_in_eng.client.get(f"/tasks/{task['id']}").status_code == 404


def test_list_filters(alice, bob_in_eng, eng_team):
    ops = alice.client.post("/teams", json={"name": "Ops"}).json()["team"]
    a = create_task(alice, eng_team["id"], title="A", assigned_to=bob_in_eng.user["id"]).json()["task"]
    b = create_task(alice, eng_team["id"], title="B", status="completed").json()["task"]
    c = create_task(alice, ops["id"], title="C").json()["task"]

    def ids(**params):
        return [t["id"] for t in alice.client.get("/tasks", params=params).json()["tasks"]]

    assert ids() == [c["id"], b["id"], a["id"]]
    assert ids(team_id=eng_team["id"]) == [b["id"], a["id"]]
    assert ids(status="completed") == [b["id"]]
    assert ids(assigned_to=bob_in_eng.user["id"]) == [a["id"]]
    assert ids(team_id=ops["id"], status="completed") == []
    assert ids(team_id=123456) == []

    # Bob sees Eng tasks only, whatever the filters say
    bob_ids = [t["id"] for t in bob_in_eng.client.get("/tasks", params={"team_id": ops["id"]}).json()["tasks"]]
    assert bob_ids == []


def test_tasks_require_session(client):
    assert client.get("/tasks").status_code == 401
    assert client.get("/tasks/1").status_code == 401
    assert client.post("/tasks", json={"title": "x", "team_id": 1}).status_code == 401
