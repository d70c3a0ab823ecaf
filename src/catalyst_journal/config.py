"""Configuration settings for Catalyst Journal."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings


# __file__ = src/catalyst_journal/config.py
PACKAGE_ROOT = Path(__file__).parent  # src/catalyst_journal/
PROJECT_ROOT = PACKAGE_ROOT.parent.parent  # repository root

# Development-only signing key; a startup warning is logged while it is in use.
DEFAULT_JWT_SECRET = "catalyst-journal-dev-secret-change-me"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8787"]
    cors_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_headers: list[str] = ["Authorization", "Content-Type"]

    # Authentication
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    min_password_length: int = 6

    # Rate limiting for the unauthenticated auth endpoints
    rate_limit_enabled: bool = True

    # Database
    db_path: Path | None = None

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.db_path is None:
            self.db_path = PROJECT_ROOT / "catalyst_journal.db"

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret_key == DEFAULT_JWT_SECRET

    class Config:
        env_prefix = "CATALYST_"
        env_file = str(PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
