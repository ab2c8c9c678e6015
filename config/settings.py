"""Django settings for the results engine."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "results-engine-insecure-dev-key")
DEBUG = str(os.environ.get("DJANGO_DEBUG", "0")).strip().lower() in {"1", "true", "yes", "on"}
ALLOWED_HOSTS = [h.strip() for h in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost").split(",") if h.strip()]

INSTALLED_APPS = [
    "results",
]

# The engine does not own any tables; enrollments come from an injected source.
DATABASES = {}

USE_TZ = True
TIME_ZONE = os.environ.get("DJANGO_TIME_ZONE", "UTC")

REDIS_URL = os.environ.get("REDIS_URL", "").strip()

if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": REDIS_URL,
            "TIMEOUT": 300,
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "results-engine",
            "TIMEOUT": 300,
        }
    }

LOG_LEVEL = os.environ.get("RESULTS_LOG_LEVEL", "INFO").strip().upper() or "INFO"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "results_context": {
            "()": "config.logging_filters.ResultsContextFilter",
        },
    },
    "formatters": {
        "console": {
            "format": (
                "%(level_color)s%(asctime)s %(levelname)s\x1b[0m %(name)s "
                "request_id=%(request_id)s student_id=%(student_id)s %(message)s"
            ),
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "filters": ["results_context"],
            "formatter": "console",
        },
    },
    "loggers": {
        "results": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
