# yourbible/settings/base.py
import os
import re
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def env_int(key: str, default: int) -> int:
    val = os.getenv(key)
    try:
        return int(val) if val is not None else default
    except (TypeError, ValueError):
        return default


def env_bool(key: str, default: bool = False) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def _split_csv_env(name: str) -> list[str]:
    raw = os.getenv(name, "")
    return [x.strip() for x in raw.split(",") if x.strip()]


def _with_scheme(origin: str) -> str:
    if origin.startswith(("http://", "https://")):
        return origin
    # localhost + IP -> http (dev)
    if origin in ("localhost",) or re.match(r"^\d{1,3}(\.\d{1,3}){3}$", origin):
        return f"http://{origin}"
    return f"https://{origin}"


SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-yourbible-local-key")

DEBUG = env_bool("DEBUG")

ALLOWED_HOSTS = _split_csv_env("ALLOWED_HOSTS")

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "corsheaders",
    "drf_yasg",
    "bible",
    "api",
]

MIDDLEWARE = [
    "yourbible.middleware.RequestLogMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "yourbible.urls"

TEMPLATES = [{
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
}]

WSGI_APPLICATION = "yourbible.wsgi.application"
ASGI_APPLICATION = "yourbible.asgi.application"

# DB: sqlite by default (override in prod)
DATABASES = {
    "default": {
        "ENGINE": os.environ.get("DB_ENGINE", default="django.db.backends.sqlite3"),
        "NAME": os.environ.get("DB_NAME", default=str(BASE_DIR / "db.sqlite3")),
        "USER": os.environ.get("DB_USER", default=""),
        "PASSWORD": os.environ.get("DB_PASSWORD", default=""),
        "HOST": os.environ.get("DB_HOST", default=""),
        "PORT": os.environ.get("DB_PORT", default=""),
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# The /bible/... surface has no trailing slashes.
APPEND_SLASH = False

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_THROTTLE_CLASSES": ["rest_framework.throttling.AnonRateThrottle"],
    "DEFAULT_THROTTLE_RATES": {"anon": os.environ.get("API_THROTTLE_RATE", "400/hour")},
    "EXCEPTION_HANDLER": "api.exceptions.api_exception_handler",
}

SWAGGER_SETTINGS = {
    "USE_SESSION_AUTH": False,
    "SECURITY_DEFINITIONS": {},
}

# CORS: empty list -> every origin is allowed
CORS_ALLOWED_ORIGINS = [_with_scheme(o) for o in _split_csv_env("CORS_ALLOWED_ORIGINS")]
CORS_ALLOW_ALL_ORIGINS = not CORS_ALLOWED_ORIGINS

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ====== Bible data ======
BIBLE_DATA_DIR = Path(os.environ.get("BIBLE_DATA_DIR", default=str(BASE_DIR / "data")))
BIBLE_CATALOG_PATH = Path(os.environ.get("BIBLE_CATALOG_PATH", default=str(BASE_DIR / "config" / "catalog.json")))
BIBLE_SEARCH_LIMIT = env_int("BIBLE_SEARCH_LIMIT", 100)

API_TITLE = "YourBible.in API"
API_VERSION = "1.0.0"

# Logging minimal (override prod)
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "root": {"handlers": ["console"], "level": "INFO"},
}
