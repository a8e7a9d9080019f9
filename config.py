import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Base config shared by all environments
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL") or "INFO"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    STORAGE_PATH = os.environ.get("STORAGE_PATH") or os.path.join(
        BASE_DIR, "data", "plans.db"
    )
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("DATABASE_URL") or f"sqlite:///{STORAGE_PATH}"
    )

    PROVIDER = {
        "name": "primary_provider",
        "url": os.environ.get("PROVIDER_URL")
        or "https://provider.code-challenge.feverup.com/api/events",
        "timeout": int(os.environ.get("PROVIDER_TIMEOUT") or 10),
        "retries": int(os.environ.get("PROVIDER_RETRIES") or 3),
    }

    # Cache settings (seconds)
    CACHE_SEARCH_TTL = int(os.environ.get("CACHE_SEARCH_TTL") or 300)
    CACHE_STATS_TTL = int(os.environ.get("CACHE_STATS_TTL") or 60)
    CACHE_SWEEP_INTERVAL = int(os.environ.get("CACHE_SWEEP_INTERVAL") or 300)

    # Flask-Caching backend, one store per process
    CACHE_TYPE = "SimpleCache"
    CACHE_DEFAULT_TIMEOUT = CACHE_SEARCH_TTL
    CACHE_THRESHOLD = int(os.environ.get("CACHE_THRESHOLD") or 10000)

    # Sync settings (seconds)
    SCHEDULER_ENABLED = _env_bool("SCHEDULER_ENABLED", True)
    SYNC_INTERVAL = int(os.environ.get("SYNC_INTERVAL") or 300)
    TIMEZONE = "UTC"

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS") or "http://localhost:3001"

    APIFAIRY_TITLE = "Plans API"
    APIFAIRY_VERSION = "1.0"


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("DEV_DATABASE_URL") or Config.SQLALCHEMY_DATABASE_URI
    )


class ProductionConfig(Config):
    LOG_LEVEL = os.environ.get("LOG_LEVEL") or "WARNING"


class TestingConfig(Config):
    TESTING = True
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL") or "sqlite://"
    SCHEDULER_ENABLED = False  # Tests drive the orchestrator directly

    PROVIDER = {
        "name": "primary_provider",
        "url": "http://provider.test/api/events",
        "timeout": 1,
        "retries": 2,
    }


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
