import os
from datetime import timedelta


def _env_bool(name, default):
    return os.environ.get(name, str(default)).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Secret key for sessions / JWT
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret")

    # Database connection; None falls back to a sqlite file in the instance folder
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_ACCESS_TOKEN_EXPIRES_HOURS", 24)))

    # Single admin account guarding the /api admin endpoints
    ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD_HASH = os.environ.get("ADMIN_PASSWORD_HASH")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")

    CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Business settings
    ROOM_PIN_LENGTH = int(os.environ.get("ROOM_PIN_LENGTH", 4))
    SCHEDULE_CLEANING_ON_MOVE_OUT = _env_bool("SCHEDULE_CLEANING_ON_MOVE_OUT", True)

    JSON_SORT_KEYS = False


class DevelopmentConfig(Config):
    DEBUG = True
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "password123")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    ADMIN_USERNAME = "admin"
    ADMIN_PASSWORD_HASH = None
    ADMIN_PASSWORD = "test-password"
    SCHEDULE_CLEANING_ON_MOVE_OUT = True
    LOG_LEVEL = "WARNING"
