# services/auth.py - bearer JWT check for session creation
import logging
from functools import wraps
from typing import Iterable, Optional

import jwt
from flask import current_app, g, request

from services.errors import ServerMisconfigured, Unauthorized

logger = logging.getLogger(__name__)


def extract_bearer_token(header: Optional[str]) -> str:
    if not header:
        raise Unauthorized("missing bearer token")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("missing bearer token")
    return token.strip()


def verify_token(token: str, secret: Optional[str], algorithms: Iterable[str] = ("HS256",)) -> dict:
    """Decode a JWT signed with the shared secret; raise Unauthorized on any failure."""
    if not secret:
        raise ServerMisconfigured()
    try:
        return jwt.decode(token, secret, algorithms=list(algorithms))
    except jwt.PyJWTError as e:
        logger.info("rejected bearer token: %s", e.__class__.__name__)
        raise Unauthorized("invalid token")


def require_bearer(view):
    """Guard a view with the bearer check when QUIZ_REQUIRE_AUTH is on."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        cfg = current_app.config
        if cfg.get("QUIZ_REQUIRE_AUTH", True):
            # A missing secret is a server fault, whatever the client sent
            if not cfg.get("JWT_SECRET"):
                current_app.logger.error("JWT_SECRET is not set but QUIZ_REQUIRE_AUTH is on")
                raise ServerMisconfigured()
            token = extract_bearer_token(request.headers.get("Authorization"))
            g.token_payload = verify_token(token, cfg["JWT_SECRET"], cfg.get("JWT_ALGORITHMS") or ["HS256"])
        return view(*args, **kwargs)

    return wrapper
