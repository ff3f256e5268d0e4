import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env")


def env_int(name, default):
    value = os.getenv(name)
    return int(value) if value not in (None, "") else default


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-doodledream-key")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = [h for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h]

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "corsheaders",
    "coloring",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
]

ROOT_URLCONF = "doodledream.urls"
WSGI_APPLICATION = "doodledream.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

# Sin persistencia: el lienzo vive en memoria
DATABASES = {}

STATIC_URL = "/static/"
DATA_UPLOAD_MAX_MEMORY_SIZE = 15 * 1024 * 1024

# ===============================
# 🔹 CORS
# ===============================
# localhost en cualquier puerto, páginas abiertas como file:// (origen "null")
# y la URL de producción si está configurada.
FRONTEND_URL = os.getenv("FRONTEND_URL", "").rstrip("/")

CORS_URLS_REGEX = r"^/api/.*$"
CORS_ALLOWED_ORIGIN_REGEXES = [r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"]
CORS_ALLOWED_ORIGINS = ["null"] + ([FRONTEND_URL] if FRONTEND_URL else [])

# ===============================
# 🔹 LIBRO DE COLOREAR
# ===============================
COLORING = {
    "OPENAI_API_KEY": os.getenv("OPENAI_API_KEY", ""),
    "IMAGE_MODEL": os.getenv("COLORING_IMAGE_MODEL", "dall-e-3"),
    "IMAGE_SIZE": os.getenv("COLORING_IMAGE_SIZE", "1024x1024"),
    "UPSTREAM_TIMEOUT": env_int("COLORING_UPSTREAM_TIMEOUT", 60),
    "RATE_LIMIT": env_int("COLORING_RATE_LIMIT", 10),
    "RATE_WINDOW": env_int("COLORING_RATE_WINDOW", 60),
    "CANVAS_WIDTH": env_int("COLORING_CANVAS_WIDTH", 800),
    "CANVAS_HEIGHT": env_int("COLORING_CANVAS_HEIGHT", 600),
    "HISTORY_LIMIT": env_int("COLORING_HISTORY_LIMIT", 30),
    "FILL_TOLERANCE": env_int("COLORING_FILL_TOLERANCE", 32),
    "ASSET_DIR": os.getenv("COLORING_ASSET_DIR", str(BASE_DIR / "coloring" / "static" / "coloring" / "assets")),
}
