"""
Time Series – Django Settings (Infrastructure Only)
===================================================
Django serves as the framework container for the projection store.
The library owns its semantics; Django provides the ORM, transactions
and app lifecycle.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("TIMESERIES_SECRET_KEY", "timeseries-dev-key")

DEBUG = os.environ.get("TIMESERIES_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "timeseries.store",
]

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately;
# row-level locking (select_for_update) needs PostgreSQL or MySQL.
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("TIMESERIES_DB_ENGINE", "django.db.backends.sqlite3"),
        "NAME": os.environ.get("TIMESERIES_DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("TIMESERIES_DB_USER", ""),
        "PASSWORD": os.environ.get("TIMESERIES_DB_PASSWORD", ""),
        "HOST": os.environ.get("TIMESERIES_DB_HOST", ""),
        "PORT": os.environ.get("TIMESERIES_DB_PORT", ""),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Time Series ───────────────────────────────────────────────
# See timeseries.conf for the recognised keys.
TIME_SERIES = {
    "DEFINITIONS": [],
    "TRIGGER_MODELS": [],
    "TIMESTAMP_FIELD": "created_at",
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "timeseries": {
            "handlers": ["console"],
            "level": os.environ.get("TIMESERIES_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
