"""Application configuration settings.

All configuration values are loaded from environment variables (.env file).
No sensitive values should be hardcoded here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    PROJECT_NAME: str = "PayLockr Subscription API"
    VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Database (URL carries the privileged service credential)
    DATABASE_URL: str = "sqlite+aiosqlite:///./paylockr.db"
    DATABASE_ECHO: bool = False

    # Flutterwave
    FLUTTERWAVE_SECRET_KEY: str = ""
    FLUTTERWAVE_BASE_URL: str = "https://api.flutterwave.com/v3"
    GATEWAY_TIMEOUT_SECONDS: float = 30.0

    # CORS headers sent on every callback response
    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_HEADERS: str = "authorization, x-client-info, apikey, content-type"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_headers(self) -> dict[str, str]:
        """CORS headers attached to every callback response."""
        return {
            "Access-Control-Allow-Origin": self.CORS_ALLOW_ORIGIN,
            "Access-Control-Allow-Headers": self.CORS_ALLOW_HEADERS,
        }


settings = Settings()
