"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"

    # App Version
    VERSION: str = "0.1.0"

    # All resource endpoints are mounted under this prefix
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite:///./askiep.db"
    # Create tables on startup (local installs without Alembic)
    DB_AUTO_CREATE: bool = False

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Error Tracking (optional, set in production)
    SENTRY_DSN: str = ""

    # Rate Limiting (slowapi limit string, empty disables)
    RATE_LIMIT_API: str = "100/15 minutes"

    # Single-tenant installs use one owner key for every request
    DEFAULT_OWNER_KEY: str = "default"

    # Generative AI
    AI_PROVIDER: str = "gemini"  # gemini | openai
    AI_API_KEY: str = ""
    AI_MODEL: str = ""  # Empty uses the provider default
    AI_TIMEOUT_SECONDS: float = 60.0
    MAX_DOCUMENT_CHARS: int = 200_000

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def is_dev(self) -> bool:
        return self.ENV == "dev"


settings = Settings()
