# routes/result_routes.py - score lookup
from flask import Blueprint, current_app, jsonify

result_bp = Blueprint("result", __name__)


@result_bp.route("/score/<uuid>", methods=["GET"])
def score(uuid):
    """Final score and completion time of a submitted session."""
    record = current_app.extensions["quiz"].get_score(uuid)
    return jsonify(record.model_dump())
