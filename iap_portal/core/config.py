import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./iap_portal.db")
DATABASE_ECHO = _get_bool(os.getenv("DATABASE_ECHO"), default=False)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY", "change-me")
SESSION_ALGORITHM = os.getenv("SESSION_ALGORITHM", "HS256")
SESSION_EXPIRES_MINUTES = int(os.getenv("SESSION_EXPIRES_MINUTES", "120"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "iap_session")

ADMIN_LOGIN_URL = os.getenv("ADMIN_LOGIN_URL", "/admin/login")
STUDENT_LOGIN_URL = os.getenv("STUDENT_LOGIN_URL", "/student/login")
QUIZ_URL = os.getenv("QUIZ_URL", "/quiz")

SEED_DEFAULT_ADMIN = _get_bool(os.getenv("SEED_DEFAULT_ADMIN"), default=True)
DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_EMAIL = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@example.com")
# bcrypt hash shipped with the legacy portal; rotate it through the login flow.
DEFAULT_ADMIN_PASSWORD_HASH = os.getenv(
    "DEFAULT_ADMIN_PASSWORD_HASH",
    "$2y$10$xHDNFM0xYFstLYe.BIHMUu4ZxCcEeKOQ3psUy85ZcbsCqdbWUy2Z.",
)


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and SESSION_SECRET_KEY == "change-me":
        raise RuntimeError("SESSION_SECRET_KEY must be set in production.")
