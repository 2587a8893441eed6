import os
from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote

from dotenv import load_dotenv, find_dotenv

load_dotenv(find_dotenv(".env") or ".env")


def _split_csv(raw: str) -> List[str]:
    return [o.strip().rstrip("/") for o in raw.split(",") if o.strip()]


class Settings:
    """Central configuration (env driven)."""

    def __init__(self) -> None:
        # Database
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite:///./institute.db")

        # Session token
        self.secret_key: str = os.getenv("SECRET_KEY", "change-me-in-production")
        self.jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
        self.session_ttl_days: int = int(os.getenv("SESSION_TTL_DAYS", "7"))

        # Cookie attributes (set and clear must use the same ones)
        self.session_cookie_name: str = os.getenv("SESSION_COOKIE_NAME", "session")
        self.cookie_secure: bool = os.getenv("COOKIE_SECURE", "true").lower() != "false"
        self.cookie_samesite: str = os.getenv("COOKIE_SAMESITE", "none").lower()
        self.cookie_domain: Optional[str] = os.getenv("COOKIE_DOMAIN") or None

        # Routing
        self.admin_route: str = os.getenv("ADMIN_ROUTE", "control-panel").strip("/")
        self.api_url: str = os.getenv("API_URL", "").rstrip("/")

        # WhatsApp enquiry link behind notices without a link and the popup card
        self.whatsapp_number: str = os.getenv("WHATSAPP_NUMBER", "")
        self.enquiry_message: str = os.getenv(
            "ENQUIRY_MESSAGE", "Hello, I saw the poster on your website and would like to know more."
        )

        # Uploaded media
        self.upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
        self.upload_url_prefix: str = "/uploads"

        self.allow_origins: List[str] = _split_csv(
            os.getenv("ALLOW_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
        )
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Bootstrap account for seed.py
        self.admin_username: str = os.getenv("ADMIN_USERNAME", "admin")
        self.admin_password: str = os.getenv("ADMIN_PASSWORD", "")

        self.app_name: str = "Institute Website"

    @property
    def session_ttl_seconds(self) -> int:
        return self.session_ttl_days * 24 * 60 * 60

    @property
    def enquiry_url(self) -> str:
        if not self.whatsapp_number:
            return ""
        return f"https://wa.me/{self.whatsapp_number}?text={quote(self.enquiry_message)}"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    return Settings()


BASE_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATE_DIR = os.path.join(BASE_DIR, "templates")
STATIC_DIR = os.path.join(BASE_DIR, "static")
