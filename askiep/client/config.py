"""Client configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for IepApiClient, read from ASKIEP_CLIENT_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="ASKIEP_CLIENT_", env_file=".env", extra="ignore"
    )

    BASE_URL: str = "http://localhost:8000/api"
    OWNER_KEY: str = "default"

    TIMEOUT_SECONDS: float = 3.0
    MAX_RETRIES: int = 2
    BASE_DELAY_SECONDS: float = 0.5
    HEALTH_TIMEOUT_SECONDS: float = 2.0
    AI_TIMEOUT_SECONDS: float = 60.0

    # Empty keeps the cache in memory only
    LOCAL_STORE_PATH: str = ""
