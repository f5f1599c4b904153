# config.py - configuration constants
import os
from pathlib import Path

# Create instance folder if it doesn't exist
INSTANCE_PATH = Path(__file__).parent / 'instance'
INSTANCE_PATH.mkdir(exist_ok=True)

# Server-side session files live in the instance folder
SESSION_DIR = INSTANCE_PATH / 'flask_session'


def _int_or_none(value):
    try:
        return int(value) if value not in (None, "") else None
    except ValueError:
        return None


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "supersecretkey")
    INSTANCE_PATH = str(INSTANCE_PATH)

    # Game state is kept per browser session; Flask-Session stores it server side
    SESSION_TYPE = os.getenv("SESSION_TYPE", "filesystem")
    SESSION_FILE_DIR = str(SESSION_DIR)
    SESSION_PERMANENT = False

    # Cookie/session security (tunable via env for local vs prod)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    # Don't force Secure cookies locally unless explicitly enabled
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"

    # Optional seed for the app-wide random source (reproducible games in demos)
    GAME_RANDOM_SEED = _int_or_none(os.getenv("GAME_RANDOM_SEED"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
