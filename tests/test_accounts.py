"""HTTP tests for registration, login and profile endpoints"""

from remotezen.models import Team, User


def _register(client, name="Grace Hopper", email="grace@example.com", password="s3cure-password"):
    return client.post("/auth/register", json={"name": name, "email": email, "password": password})


def test_register_creates_personal_team(client):
    response = _register(client)

    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "grace@example.com"
    assert body["user"]["role"] == "USER"
    assert body["token"]
    assert [(t["name"], t["role"]) for t in body["teams"]] == [("Grace Hopper's Team", "MANAGER")]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.json()["user"]["id"] == body["user"]["id"]


def test_register_normalizes_email_and_rejects_duplicates(client):
    assert _register(client, email="Grace@Example.com").status_code == 201

    response = _register(client, email="grace@example.com")

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_register_validation(client):
    assert _register(client, password="short").status_code == 400
    assert _register(client, email="nope").status_code == 400
    assert _register(client, name="  ").status_code == 400


def test_register_accepts_pending_invitations(client, make_user, make_team, headers):
    manager = make_user()
    team = make_team(manager, name="Ops", role="MANAGER")
    client.post("/invites", json={"teamId": team.id, "email": "grace@example.com", "role": "MEMBER"}, headers=headers(manager))

    body = _register(client).json()

    teams = {t["name"]: t["role"] for t in body["teams"]}
    assert teams == {"Grace Hopper's Team": "MANAGER", "Ops": "MEMBER"}
    assert client.get("/invites", params={"teamId": team.id}, headers=headers(manager)).json() == []


def test_failed_registration_leaves_nothing_behind(client, db_session, make_user):
    make_user(email="grace@example.com")

    assert _register(client).status_code == 409
    assert db_session.query(Team).filter(Team.name == "Grace Hopper's Team").count() == 0


def test_login(client, make_user, user_password):
    user = make_user(email="ada@example.com")

    response = client.post("/auth/login", json={"email": " ADA@example.com ", "password": user_password})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == user.id
    assert response.json()["token"]


def test_login_rejects_bad_credentials(client, db_session, make_user, user_password):
    make_user(email="ada@example.com")
    external = User(name="External", email="ext@example.com", password_hash=None, auth_provider="google")
    db_session.add(external)
    db_session.commit()

    for payload in (
        {"email": "ada@example.com", "password": "wrong-password"},
        {"email": "nobody@example.com", "password": user_password},
        {"email": "ext@example.com", "password": user_password},
    ):
        response = client.post("/auth/login", json=payload)
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials", "code": "UNAUTHENTICATED"}


def test_me_lists_team_roles(client, make_user, make_team, add_member, headers):
    user = make_user()
    own = make_team(user, name="Own")
    other = make_team(make_user(), name="Other")
    add_member(other, user, role="MANAGER")

    body = client.get("/auth/me", headers=headers(user)).json()

    assert body["teams"] == [
        {"id": own.id, "name": "Own", "role": "ADMIN"},
        {"id": other.id, "name": "Other", "role": "MANAGER"},
    ]


def test_update_profile(client, make_user, headers, user_password):
    user = make_user(email="ada@example.com")

    response = client.patch("/users/me", json={"name": "Ada L.", "password": "brand-new-password"}, headers=headers(user))

    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Ada L."
    assert client.post("/auth/login", json={"email": "ada@example.com", "password": user_password}).status_code == 401
    assert (
        client.post("/auth/login", json={"email": "ada@example.com", "password": "brand-new-password"}).status_code
        == 200
    )


def test_update_profile_rejects_short_password(client, make_user, headers):
    response = client.patch("/users/me", json={"password": "short"}, headers=headers(make_user()))

    assert response.status_code == 400


def test_check_email(client, make_user):
    make_user(email="ada@example.com")

    assert client.post("/users/check", json={"email": "ADA@example.com"}).json() == {"exists": True}
    assert client.post("/users/check", json={"email": "who@example.com"}).json() == {"exists": False}
