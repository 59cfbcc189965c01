"""Functional endpoint-by-endpoint verification script.
Run inside the virtual environment:
  python functional_check.py
Outputs tuple of (status_code, heuristic_content_ok) per route.
"""

import jwt

from app import create_app

_SECRET = "functional-check-secret-0123456789abcdef"


def run_checks():
    app = create_app(
        {
            "TESTING": True,
            "QUIZ_STORE_URL": "sqlite:///:memory:",
            "QUIZ_REQUIRE_AUTH": True,
            "JWT_SECRET": _SECRET,
        }
    )
    service = app.extensions["quiz"]
    results = {}
    try:
        with app.test_client() as c:
            prefix = app.config.get("URL_PREFIX") or ""

            # Health
            r = c.get("/healthz")
            results["healthz"] = (r.status_code, bool(r.get_json().get("store")))

            # Create session without a token
            r = c.post(f"{prefix}/create-session")
            results["create_unauthorized"] = (r.status_code, r.status_code == 401)

            # Create session
            token = jwt.encode({"sub": "functional-check"}, _SECRET, algorithm="HS256")
            r = c.post(f"{prefix}/create-session", headers={"Authorization": f"Bearer {token}"})
            body = r.get_json() or {}
            session_id = body.get("sessionUUID")
            results["create_session"] = (r.status_code, bool(session_id))

            # Questions, no answer key
            r = c.get(f"/session/{session_id}")
            questions = (r.get_json() or {}).get("questions", [])
            results["get_session"] = (
                r.status_code,
                len(questions) == service.questions_per_session
                and all("correctAnswer" not in q for q in questions),
            )

            # Empty submission is rejected and leaves the session alone
            r = c.post(f"/session/{session_id}/submit", json=[])
            results["submit_empty"] = (r.status_code, r.status_code == 400)

            # Submit the correct answer for each question from the catalog
            answers = [
                {"id": q["id"], "answer": service.catalog.get(q["id"]).correct_answer}
                for q in questions
            ]
            r = c.post(f"/session/{session_id}/submit", json=answers)
            results["submit"] = (r.status_code, (r.get_json() or {}).get("score") == len(answers))

            # Session is single use
            r = c.get(f"/session/{session_id}")
            results["session_consumed"] = (r.status_code, r.status_code == 404)

            # Score
            r = c.get(f"/score/{session_id}")
            data = r.get_json() or {}
            results["score"] = (r.status_code, data.get("score") == len(answers) and "time" in data)

            # Unknown routes
            r = c.get("/this-route-does-not-exist")
            results["404"] = (r.status_code, r.status_code == 404)
    finally:
        service.store.close()
    return results


if __name__ == "__main__":
    for name, (status, ok) in run_checks().items():
        print(f"{name:20s} {status} {'OK' if ok else 'FAIL'}")
