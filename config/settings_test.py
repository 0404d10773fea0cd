import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

from config.settings import *  # noqa: E402,F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REDIS_URL = "redis://localhost:6379/15"
FRONTEND_URL = "http://testserver"

MEDIA_ROOT = BASE_DIR / "test-media"  # noqa: F405

CSRF_COOKIE_SECURE = False
SESSION_COOKIE_SECURE = False

NOTIFICATIONS_ADMIN_BROADCAST = True
