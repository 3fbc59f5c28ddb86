"""Configuration management for the application."""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (in-memory SQLite unless overridden)
    database_url: str = Field(default="sqlite://")

    # Sessions
    session_ttl_hours: int = Field(default=24)
    session_sweep_interval_seconds: int = Field(default=300)
    auth_cookie_name: str = Field(default="auth-token")

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Ticketing
    ticket_unit_price: float = Field(default=25.0, gt=0)

    # Startup
    seed_demo_data: bool = Field(default=True)

    # API
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"],
    )

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production has secure settings."""
        if self.session_ttl_hours <= 0:
            raise ValueError("SESSION_TTL_HOURS must be positive")
        if self.environment == "production" and self.seed_demo_data:
            raise ValueError("SEED_DEMO_DATA must be disabled in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
