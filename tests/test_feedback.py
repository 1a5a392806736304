"""HTTP tests for feedback"""

from remotezen.models import Feedback


def test_anonymous_feedback(client, db_session):
    response = client.post("/feedback", json={"name": " Visitor ", "message": "  Love the timer  "})

    assert response.status_code == 201
    assert response.json()["message"] == "Feedback submitted successfully"
    stored = db_session.query(Feedback).filter(Feedback.id == response.json()["id"]).one()
    assert stored.user_id is None
    assert stored.name == "Visitor"
    assert stored.message == "Love the timer"


def test_signed_in_feedback_is_linked_to_user(client, db_session, make_user, headers):
    user = make_user(name="Ada", email="ada@example.com")

    feedback_id = client.post("/feedback", json={"message": "Dark mode please"}, headers=headers(user)).json()["id"]

    stored = db_session.query(Feedback).filter(Feedback.id == feedback_id).one()
    assert stored.user_id == user.id
    assert stored.email == "ada@example.com"


def test_blank_feedback_rejected(client):
    response = client.post("/feedback", json={"message": "   "})

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_listing_feedback_requires_global_admin(client, make_user, headers):
    client.post("/feedback", json={"message": "first"})
    client.post("/feedback", json={"message": "second"}, headers=headers(make_user(name="Sender")))
    admin = make_user(role="ADMIN")

    assert client.get("/feedback").status_code == 401
    assert client.get("/feedback", headers=headers(make_user())).status_code == 403

    response = client.get("/feedback", headers=headers(admin))
    assert response.status_code == 200
    body = response.json()
    assert {f["message"] for f in body} == {"first", "second"}
    created = [f["createdAt"] for f in body]
    assert created == sorted(created, reverse=True)
    assert {f["user"]["name"] if f["user"] else None for f in body} == {None, "Sender"}
