from functools import lru_cache
from typing import List
from pydantic import BaseModel
import os


from dotenv import load_dotenv
load_dotenv()


def _env_bool(name: str, default: str = "") -> bool:
    return (os.getenv(name, default) or "").strip().lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "Daily Diet API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    environment: str = os.getenv("ENVIRONMENT", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    docs_url: str = os.getenv("DOCS_URL", "/docs")

    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./daily_diet.db")

    # Shared secret for the admin-only endpoints (x-api-key header).
    # Empty means every admin request is rejected.
    admin_api_key: str = os.getenv("ADMIN_API_KEY", "")

    frontend_url: str = os.getenv("FRONTEND_URL", "")
    session_ttl_days: int = int(os.getenv("SESSION_TTL_DAYS", "7"))
    cookie_secure: bool = _env_bool("COOKIE_SECURE")
    verification_code_ttl_min: int = int(os.getenv("VERIFICATION_CODE_TTL_MIN", "15"))

    # "smtp" sends real mail, "console" only logs the message (local development)
    mail_backend: str = os.getenv("MAIL_BACKEND", "smtp")
    smtp_server: str = os.getenv("SMTP_SERVER", "")
    smtp_port: int = int(os.getenv("SMTP_PORT", "587"))
    smtp_user: str = os.getenv("SMTP_USER", "")
    smtp_password: str = os.getenv("SMTP_PASSWORD", "")
    mail_from: str = os.getenv("MAIL_FROM", "")
    mail_from_name: str = os.getenv("MAIL_FROM_NAME", "Daily Diet")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def session_max_age(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    @property
    def cors_origins(self) -> List[str]:
        origins = ["http://localhost:5173", "http://localhost:3000"]
        if self.frontend_url:
            origins.append(self.frontend_url.rstrip("/"))
        return origins


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings once; injected everywhere via Depends(get_settings)."""
    return Settings()
