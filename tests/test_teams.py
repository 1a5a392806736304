"""HTTP tests for teams and membership"""


def test_create_team_makes_creator_admin(client, make_user, headers):
    user = make_user(name="Ada")

    response = client.post("/teams", json={"name": "  Platform  "}, headers=headers(user))

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Platform"
    assert [(m["user"]["id"], m["role"]) for m in body["members"]] == [(user.id, "ADMIN")]


def test_create_team_requires_name(client, make_user, headers):
    response = client.post("/teams", json={"name": "   "}, headers=headers(make_user()))

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_list_teams_only_returns_own_teams(client, make_user, make_team, headers):
    user = make_user()
    other = make_user()
    mine = make_team(user, name="Mine")
    make_team(other, name="Theirs")

    response = client.get("/teams", headers=headers(user))

    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [mine.id]


def test_get_team_forbidden_for_non_member_and_unknown_team(client, make_user, make_team, headers):
    owner = make_user()
    stranger = make_user()
    team = make_team(owner)

    foreign = client.get(f"/teams/{team.id}", headers=headers(stranger))
    unknown = client.get("/teams/does-not-exist", headers=headers(stranger))

    assert foreign.status_code == 403
    assert unknown.status_code == 403
    assert foreign.json() == unknown.json()


def test_join_team(client, make_user, make_team, headers):
    owner = make_user()
    joiner = make_user()
    team = make_team(owner, name="Open Team")

    response = client.post(f"/teams/{team.id}/join", headers=headers(joiner))

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "MEMBER"
    assert body["team"] == {"id": team.id, "name": "Open Team"}

    members = client.get(f"/teams/{team.id}/members", headers=headers(joiner)).json()
    assert [m["user"]["id"] for m in members] == [owner.id, joiner.id]


def test_join_team_twice_conflicts(client, make_user, make_team, headers):
    owner = make_user()
    team = make_team(owner)

    response = client.post(f"/teams/{team.id}/join", headers=headers(owner))

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_join_unknown_team(client, make_user, headers):
    response = client.post("/teams/nope/join", headers=headers(make_user()))

    assert response.status_code == 404


def test_members_list_requires_membership(client, make_user, make_team, headers):
    team = make_team(make_user())

    response = client.get(f"/teams/{team.id}/members", headers=headers(make_user()))

    assert response.status_code == 403
