# routes/quiz_routes.py - session creation, question fetch and answer submission
from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest as BadJSON

from services.auth import require_bearer

create_bp = Blueprint("create", __name__)
quiz_bp = Blueprint("quiz", __name__)

# Stands in for an unparseable body so the service still checks the session first
_MALFORMED_BODY = object()


def _quiz_service():
    return current_app.extensions["quiz"]


def _read_answers_body():
    if not request.get_data(cache=True).strip():
        return None
    try:
        return request.get_json(force=True)
    except BadJSON:
        return _MALFORMED_BODY


@create_bp.route("/create-session", methods=["POST"])
@require_bearer
def create_session():
    """Start a quiz: pick the questions, store the session, hand back its uuid."""
    session = _quiz_service().create_session()
    return jsonify({"message": "Session created!", "sessionUUID": session.uuid})


@quiz_bp.route("/session/<uuid>", methods=["GET"])
def get_session(uuid):
    """Questions of a live session, without the answer key."""
    questions = _quiz_service().get_questions(uuid)
    headers = {k: v for k, v in request.headers.items() if k.lower() not in ("authorization", "cookie")}
    current_app.logger.debug("session fetch id=%s headers=%s", uuid, headers)
    return jsonify({"questions": [q.model_dump(by_alias=True) for q in questions]})


@quiz_bp.route("/session/<uuid>/submit", methods=["POST"])
def submit(uuid):
    """Score the submitted answers; the session is consumed on success."""
    record = _quiz_service().submit(uuid, _read_answers_body())
    return jsonify({"score": record.score})
