# shop_manager/settings.py
#
# Purpose:
# - Django settings for the shop manager backend.
# - Every deploy-specific value is read from the environment; a .env file at
#   the project root is loaded first (python-dotenv) so local runs need no
#   exported variables.
#
# Notes for developers:
# - TIME_ZONE is the single "system" zone. Business hours, day boundaries and
#   the slot strings returned by the API are all interpreted in this zone.
# - BUSINESS_HOURS can be overridden at runtime through configmgr.SystemSetting
#   rows BUSINESS_OPEN / BUSINESS_CLOSE (see booking/services/slot_utils.py).
#
import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(dotenv_path=BASE_DIR / ".env")


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


# -------------------------
# Core
# -------------------------
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY")
if not SECRET_KEY:
    warnings.warn(
        "DJANGO_SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    SECRET_KEY = "insecure-dev-key-change-in-production"  # noqa: S105

DEBUG = _env_bool("DJANGO_DEBUG", default=False)

ALLOWED_HOSTS = [
    h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if h.strip()
]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "configmgr",
    "staff",
    "booking",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "shop_manager.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "shop_manager.wsgi.application"

# -------------------------
# Database
# -------------------------
# SQLite by default. The test database is a file
# rather than in-memory so that threaded tests get real, separate connections.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("SQLITE_PATH", str(BASE_DIR / "ShopManager.sqlite3")),
        "OPTIONS": {"timeout": 20},
        "TEST": {"NAME": str(BASE_DIR / "test_ShopManager.sqlite3")},
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
]

# -------------------------
# Time
# -------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "Europe/Oslo")
USE_I18N = True
USE_TZ = True

# -------------------------
# Static files
# -------------------------
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# -------------------------
# REST framework
# -------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
}

# -------------------------
# Scheduling
# -------------------------
BUSINESS_HOURS = {
    "start": os.getenv("BUSINESS_START", "08:00"),
    "end": os.getenv("BUSINESS_END", "23:55"),
}
SLOT_INTERVAL_MINUTES = _env_int("SLOT_INTERVAL_MINUTES", 10)
SLOT_FORMAT = "%Y-%m-%d %H:%M"

# -------------------------
# Booking links
# -------------------------
BOOKING_LINK_TTL_MINUTES = _env_int("BOOKING_LINK_TTL_MINUTES", 60)
PUBLIC_BOOKING_URL = os.getenv("PUBLIC_BOOKING_URL", "http://localhost:8000")

# -------------------------
# Mobile API (JWT)
# -------------------------
JWT_SECRET = os.getenv("JWT_SECRET", SECRET_KEY)
JWT_ALGORITHM = "HS256"
JWT_ISSUER = os.getenv("JWT_ISSUER", "shop-manager")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "mobile")
JWT_TTL_DAYS = _env_int("JWT_TTL_DAYS", 30)

# -------------------------
# Logging
# -------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "booking": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "staff": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "configmgr": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}
