"""HTTP tests for the task store"""

import pytest


@pytest.fixture
def team_setup(make_user, make_team, add_member):
    owner = make_user(name="Owner")
    member = make_user(name="Member")
    outsider = make_user(name="Outsider")
    team = make_team(owner, name="Core")
    add_member(team, member)
    return owner, member, outsider, team


def test_create_task(client, team_setup, headers):
    owner, member, _, team = team_setup

    response = client.post(
        "/tasks",
        json={"teamId": team.id, "title": "Ship it", "assignedToId": member.id, "dueDate": "2026-03-10T12:00:00Z"},
        headers=headers(owner),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "PENDING"
    assert body["createdById"] == owner.id
    assert body["assignedTo"]["id"] == member.id
    assert body["team"] == {"id": team.id, "name": "Core"}
    assert body["dueDate"].startswith("2026-03-10T12:00:00")


def test_create_task_requires_membership(client, team_setup, headers):
    _, _, outsider, team = team_setup

    response = client.post("/tasks", json={"teamId": team.id, "title": "Nope"}, headers=headers(outsider))

    assert response.status_code == 403


def test_create_task_rejects_assignee_outside_team(client, team_setup, headers):
    owner, _, outsider, team = team_setup

    response = client.post(
        "/tasks",
        json={"teamId": team.id, "title": "Nope", "assignedToId": outsider.id},
        headers=headers(owner),
    )

    assert response.status_code == 400
    assert response.json() == {
        "error": "Assignee must be a member of the task's team",
        "code": "VALIDATION_ERROR",
    }


def test_create_task_requires_title(client, team_setup, headers):
    owner, _, _, team = team_setup

    response = client.post("/tasks", json={"teamId": team.id, "title": " "}, headers=headers(owner))

    assert response.status_code == 400


def test_list_tasks_by_team_and_assignee(client, team_setup, make_task, make_team, headers):
    owner, member, _, team = team_setup
    other_team = make_team(member, name="Side project")
    assigned = make_task(team, owner, title="Assigned", assigned_to_id=member.id)
    make_task(team, owner, title="Unassigned")
    side = make_task(other_team, member, title="Side")

    all_tasks = client.get("/tasks", headers=headers(member)).json()
    team_tasks = client.get("/tasks", params={"teamId": team.id}, headers=headers(member)).json()
    mine = client.get("/tasks", params={"assignedToId": "me"}, headers=headers(member)).json()
    mine_route = client.get("/tasks/mine", headers=headers(member)).json()

    assert {t["title"] for t in all_tasks} == {"Assigned", "Unassigned", "Side"}
    assert {t["title"] for t in team_tasks} == {"Assigned", "Unassigned"}
    assert [t["id"] for t in mine] == [assigned.id]
    assert [t["id"] for t in mine_route] == [assigned.id]
    assert side.id not in {t["id"] for t in team_tasks}


def test_list_tasks_of_foreign_team_forbidden(client, team_setup, headers):
    _, _, outsider, team = team_setup

    response = client.get("/tasks", params={"teamId": team.id}, headers=headers(outsider))

    assert response.status_code == 403


def test_get_task(client, team_setup, make_task, headers):
    owner, member, outsider, team = team_setup
    task = make_task(team, owner)

    assert client.get(f"/tasks/{task.id}", headers=headers(member)).status_code == 200
    assert client.get(f"/tasks/{task.id}", headers=headers(outsider)).status_code == 403
    assert client.get("/tasks/missing", headers=headers(member)).status_code == 404


def test_patch_changes_only_sent_fields(client, team_setup, make_task, headers):
    owner, member, _, team = team_setup
    task = make_task(team, owner, title="Draft", description="Keep me", assigned_to_id=member.id)

    response = client.patch(f"/tasks/{task.id}", json={"status": "IN_PROGRESS"}, headers=headers(member))

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "IN_PROGRESS"
    assert body["title"] == "Draft"
    assert body["description"] == "Keep me"
    assert body["assignedToId"] == member.id


def test_patch_null_clears_assignment(client, team_setup, make_task, headers):
    owner, member, _, team = team_setup
    task = make_task(team, owner, assigned_to_id=member.id)

    response = client.patch(f"/tasks/{task.id}", json={"assignedToId": None}, headers=headers(owner))

    assert response.status_code == 200
    assert response.json()["assignedToId"] is None
    assert response.json()["assignedTo"] is None


@pytest.mark.parametrize("blank", ["", "   "])
def test_patch_blank_assignee_clears_assignment(client, team_setup, make_task, headers, blank):
    owner, member, _, team = team_setup
    task = make_task(team, owner, assigned_to_id=member.id)

    response = client.patch(f"/tasks/{task.id}", json={"assignedToId": blank}, headers=headers(owner))

    assert response.status_code == 200
    assert response.json()["assignedToId"] is None


def test_patch_revalidates_assignee(client, team_setup, make_task, headers):
    owner, _, outsider, team = team_setup
    task = make_task(team, owner)

    response = client.patch(f"/tasks/{task.id}", json={"assignedToId": outsider.id}, headers=headers(owner))

    assert response.status_code == 400


@pytest.mark.parametrize("payload", [{"status": "ARCHIVED"}, {"status": None}, {"title": None}])
def test_patch_rejects_invalid_values(client, team_setup, make_task, headers, payload):
    owner, _, _, team = team_setup
    task = make_task(team, owner)

    response = client.patch(f"/tasks/{task.id}", json=payload, headers=headers(owner))

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_delete_permissions(client, team_setup, make_task, add_member, make_user, headers):
    owner, member, _, team = team_setup
    manager = make_user(name="Manager")
    add_member(team, manager, role="MANAGER")
    by_owner = make_task(team, owner, title="Owner's")
    by_member = make_task(team, member, title="Member's")
    another = make_task(team, owner, title="Another")

    # Plain member cannot delete someone else's task
    assert client.delete(f"/tasks/{by_owner.id}", headers=headers(member)).status_code == 403

    # Creator can always delete their own
    response = client.delete(f"/tasks/{by_member.id}", headers=headers(member))
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}

    # Managers can delete any task of the team
    assert client.delete(f"/tasks/{another.id}", headers=headers(manager)).status_code == 200
    assert client.get(f"/tasks/{another.id}", headers=headers(owner)).status_code == 404
