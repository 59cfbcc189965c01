"""End-to-end quiz flow over HTTP.
Creates a session, reads the questions, answers them and checks that the
score is stored and the session is gone.
"""

import jwt
import pytest

from app import create_app
from services.catalog import QuestionCatalog

SECRET = "test-secret-0123456789abcdef0123456789"

CATALOG = QuestionCatalog.from_records(
    [
        {"id": 1, "questionText": "Q1", "options": ["A", "B", "C"], "correctAnswer": "A"},
        {"id": 2, "questionText": "Q2", "options": ["1984", "1985"], "correctAnswer": "1984"},
        {"id": 3, "questionText": "Q3", "options": ["Newton", "Einstein"], "correctAnswer": "Einstein"},
    ]
)


@pytest.fixture
def app():
    app = create_app(
        {
            "TESTING": True,
            "QUIZ_STORE_URL": "sqlite:///:memory:",
            "QUIZ_REQUIRE_AUTH": True,
            "JWT_SECRET": SECRET,
        },
        catalog=CATALOG,
    )
    yield app
    app.extensions["quiz"].store.close()


@pytest.fixture
def client(app):
    return app.test_client()


def _auth():
    return {"Authorization": "Bearer " + jwt.encode({"sub": "tester"}, SECRET, algorithm="HS256")}


def test_quiz_full_flow(client):
    r = client.post("/create-session", headers=_auth())
    assert r.status_code == 200
    body = r.get_json()
    assert body["message"] == "Session created!"
    session_id = body["sessionUUID"]

    r = client.get(f"/session/{session_id}")
    assert r.status_code == 200
    questions = r.get_json()["questions"]
    assert sorted(q["id"] for q in questions) == [1, 2, 3]
    assert all(set(q) == {"id", "questionText", "options"} for q in questions)
    assert b"correctAnswer" not in r.data

    answers = [{"id": 1, "answer": "A"}, {"id": 2, "answer": "1984"}, {"id": 3, "answer": "Newton"}]
    r = client.post(f"/session/{session_id}/submit", json=answers)
    assert r.status_code == 200
    assert r.get_json() == {"score": 2}

    # Session is single use
    assert client.get(f"/session/{session_id}").status_code == 404
    assert client.post(f"/session/{session_id}/submit", json=answers).status_code == 404

    r = client.get(f"/score/{session_id}")
    assert r.status_code == 200
    data = r.get_json()
    assert data["score"] == 2
    assert isinstance(data["time"], int)


def test_perfect_and_zero_scores(client):
    for answers, expected in (
        ({1: "A", 2: "1984", 3: "Einstein"}, 3),
        ({1: "C", 2: "1985", 3: "Newton"}, 0),
    ):
        session_id = client.post("/create-session", headers=_auth()).get_json()["sessionUUID"]
        payload = [{"id": k, "answer": v} for k, v in answers.items()]
        r = client.post(f"/session/{session_id}/submit", json=payload)
        assert r.get_json()["score"] == expected


def test_url_prefix_moves_create_session_only():
    app = create_app(
        {
            "TESTING": True,
            "QUIZ_STORE_URL": "sqlite:///:memory:",
            "QUIZ_REQUIRE_AUTH": False,
            "URL_PREFIX": "/bilisimekipyonetim",
        },
        catalog=CATALOG,
    )
    try:
        c = app.test_client()
        assert c.post("/create-session").status_code == 404
        r = c.post("/bilisimekipyonetim/create-session")
        assert r.status_code == 200
        session_id = r.get_json()["sessionUUID"]
        assert c.get(f"/session/{session_id}").status_code == 200
    finally:
        app.extensions["quiz"].store.close()
