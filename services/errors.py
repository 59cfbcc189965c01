# services/errors.py - error taxonomy surfaced by the quiz API
class QuizError(Exception):
    """Base error carrying the HTTP status and the user-facing message."""

    status_code = 500
    default_message = "internal error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"message": self.message}


class BadRequest(QuizError):
    status_code = 400
    default_message = "bad request"


class Unauthorized(QuizError):
    status_code = 401
    default_message = "invalid token"


class NotFound(QuizError):
    status_code = 404
    default_message = "not found"


class ServerMisconfigured(QuizError):
    status_code = 500
    default_message = "server secret is not configured"


class StoreError(QuizError):
    status_code = 500
    default_message = "store is not connected"


class ConfigurationError(Exception):
    """Raised at startup when the catalog or settings cannot work together."""
