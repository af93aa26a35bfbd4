"""Django settings for the product catalog API.

Everything environment-specific is read through python-decouple
(environment variables or a ``.env`` file):

    SECRET_KEY              required
    DEBUG                   default False; exposes failure details in 500s
    ALLOWED_HOSTS           comma separated
    DATABASE_URL            dj-database-url syntax; default local SQLite
    CONN_MAX_AGE            seconds a connection is reused, 0 = per request
    CORS_ALLOWED_ORIGINS    comma separated whitelist
    JWT_*                   bearer token verification, see CATALOG_AUTH
    LOG_LEVEL               root log level
"""

from pathlib import Path

from decouple import Csv, config
from dj_database_url import parse as db_url

from modules.core.logging_config import build_logging_config, configure_structlog

BASE_DIR = Path(__file__).resolve().parent.parent

# Fail Fast: no default forces explicit configuration
SECRET_KEY = config("SECRET_KEY")
DEBUG = config("DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="127.0.0.1,localhost", cast=Csv())

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "corsheaders",
    "drf_spectacular",
    "modules.core",
    "modules.products",
]

# Request pipeline, applied top to bottom.  CORS runs first so preflight
# requests are answered before anything else sees them.
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "modules.core.middleware.CorrelationIdMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# Only the Swagger UI page renders a template.
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": ["django.template.context_processors.request"]},
    },
]

# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------
# Opened lazily on first query; closed at request end unless CONN_MAX_AGE > 0.
DATABASES = {
    "default": config(
        "DATABASE_URL", default=f'sqlite:///{BASE_DIR / "db.sqlite3"}', cast=db_url
    )
}
DATABASES["default"]["CONN_MAX_AGE"] = config("CONN_MAX_AGE", default=0, cast=int)
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# ---------------------------------------------------------------------------
# Django REST Framework
# ---------------------------------------------------------------------------
# Fail Closed: every view requires a bearer token unless it opts out.
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "modules.core.authentication.BearerTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "EXCEPTION_HANDLER": "modules.core.exception_handler.catalog_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# Bearer token verification (PyJWT).  With JWT_JWKS_URL set, keys come from
# the identity provider and JWT_SIGNING_KEY is ignored.
CATALOG_AUTH = {
    "SIGNING_KEY": config("JWT_SIGNING_KEY", default=SECRET_KEY),
    "ALGORITHM": config("JWT_ALGORITHM", default="HS256"),
    "AUDIENCE": config("JWT_AUDIENCE", default=""),
    "ISSUER": config("JWT_ISSUER", default=""),
    "JWKS_URL": config("JWT_JWKS_URL", default=""),
    "JWKS_CACHE_SECONDS": config("JWT_JWKS_CACHE_SECONDS", default=300, cast=int),
}

# ---------------------------------------------------------------------------
# CORS (django-cors-headers)
# ---------------------------------------------------------------------------
# Requests without an Origin header are not affected.
CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS",
    default=(
        "http://localhost:3000,http://localhost:3001,"
        "http://localhost:5173,https://impertula.com"
    ),
    cast=Csv(),
)
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["content-type", "authorization"]
CORS_EXPOSE_HEADERS = ["Content-Range", "X-Content-Range"]
CORS_PREFLIGHT_MAX_AGE = 600

# ---------------------------------------------------------------------------
# OpenAPI (drf-spectacular)
# ---------------------------------------------------------------------------
SPECTACULAR_SETTINGS = {
    "TITLE": "Product Catalog API",
    "DESCRIPTION": "Product catalog: public reads, bearer-protected writes.",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    "SERVE_AUTHENTICATION": [],
}

# ---------------------------------------------------------------------------
# Logging (structlog, JSON to stdout)
# ---------------------------------------------------------------------------
configure_structlog()
LOGGING = build_logging_config(config("LOG_LEVEL", default="INFO"))
