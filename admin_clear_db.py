"""
Admin endpoint to purge the quiz key-value store over HTTP.
Requires a secret token so it can be left deployed but disabled.

Usage:
1. Set ADMIN_CLEAR_TOKEN in the environment
2. POST /admin/purge?token=YOUR_SECRET_TOKEN            -> drop expired entries
   POST /admin/purge?token=YOUR_SECRET_TOKEN&all=1      -> drop everything
3. Unset ADMIN_CLEAR_TOKEN to disable the endpoint again
"""

import os

from flask import Blueprint, current_app, jsonify, request

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


@admin_bp.route("/purge", methods=["POST"])
def purge_store():
    """Purge expired (or all) store entries. Requires ADMIN_CLEAR_TOKEN."""

    # Check if feature is enabled
    expected_token = os.getenv("ADMIN_CLEAR_TOKEN")
    if not expected_token:
        return (
            jsonify(
                {
                    "error": "Admin endpoint disabled",
                    "message": "Set ADMIN_CLEAR_TOKEN environment variable to enable this endpoint",
                }
            ),
            403,
        )

    # Verify token
    provided_token = request.args.get("token")
    if not provided_token or provided_token != expected_token:
        return jsonify({"error": "Unauthorized", "message": "Invalid or missing token"}), 401

    store = current_app.extensions["quiz"].store
    if request.args.get("all") == "1":
        deleted = store.clear()
        scope = "all"
    else:
        deleted = store.purge_expired()
        scope = "expired"

    current_app.logger.info("admin purge scope=%s deleted=%d", scope, deleted)
    return jsonify({"success": True, "scope": scope, "deleted": deleted}), 200
