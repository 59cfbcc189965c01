# config.py - configuration constants
import os
from pathlib import Path

# Create instance folder if it doesn't exist
INSTANCE_PATH = Path(__file__).parent / 'instance'
INSTANCE_PATH.mkdir(exist_ok=True)

# Key-value store file will be stored in the instance folder
STORE_PATH = INSTANCE_PATH / 'quiz_store.db'

# Static question catalog shipped with the app
QUESTIONS_PATH = Path(__file__).parent / 'data' / 'questions.json'


def _env_int(name, default):
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_optional_int(name):
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class Config:
    # Use QUIZ_STORE_URL for production, fallback to SQLite for local development
    QUIZ_STORE_URL = os.getenv("QUIZ_STORE_URL", f"sqlite:///{STORE_PATH.absolute()}")
    INSTANCE_PATH = str(INSTANCE_PATH)
    QUESTIONS_FILE = os.getenv("QUESTIONS_FILE", str(QUESTIONS_PATH))

    # Bearer JWT on /create-session; the secret has no default on purpose
    JWT_SECRET = os.getenv("JWT_SECRET")
    JWT_ALGORITHMS = [a.strip() for a in os.getenv("JWT_ALGORITHMS", "HS256").split(",") if a.strip()]
    QUIZ_REQUIRE_AUTH = os.getenv("QUIZ_REQUIRE_AUTH", "1") == "1"

    # Reject submissions that don't answer exactly QUESTIONS_PER_SESSION questions
    QUIZ_ENFORCE_ANSWER_COUNT = os.getenv("QUIZ_ENFORCE_ANSWER_COUNT", "1") == "1"
    QUESTIONS_PER_SESSION = _env_int("QUESTIONS_PER_SESSION", 3)

    # All store expiries are in seconds
    SESSION_TTL_SECONDS = _env_int("SESSION_TTL_SECONDS", 300)
    # None keeps score records forever
    SCORE_TTL_SECONDS = _env_optional_int("SCORE_TTL_SECONDS")

    # Mount point for /create-session (e.g. "/bilisimekipyonetim")
    URL_PREFIX = os.getenv("URL_PREFIX", "").rstrip("/")

    HEALTHZ_STRICT = os.getenv("HEALTHZ_STRICT", "0") == "1"
