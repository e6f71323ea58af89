"""Flask application configuration."""

import os
from pathlib import Path


class Config:
    """Base configuration."""

    BASE_DIR = Path(__file__).parent.parent
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key-change-in-production")
    APP_VERSION = "1.0.0"

    # Calibration data
    CALIBRATION_TABLES_PATH = Path(
        os.environ.get(
            "CALIBRATION_TABLES_PATH", BASE_DIR / "data" / "calibration_tables.json"
        )
    )

    # Conversion history kept in the session
    HISTORY_LIMIT = int(os.environ.get("HISTORY_LIMIT", "5"))

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL")
    LOG_DIR = os.environ.get("LOG_DIR")
    LOG_JSON_FORMAT = os.environ.get("LOG_JSON_FORMAT", "True").lower() == "true"

    # Security settings
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600  # 1 hour
    MAX_CONTENT_LENGTH = 64 * 1024  # JSON bodies only

    # Rate limiting storage (in production use Redis)
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")

    # CORS settings
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "http://localhost:5001,https://localhost:5001").split(",")

    # Session security
    SESSION_COOKIE_SECURE = os.environ.get("SESSION_SECURE", "False").lower() == "true"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_JSON_FORMAT = False


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    PRELOAD_CALIBRATION = True


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
