"""Configuration management using pydantic-settings.

All environment variables are loaded and validated here.
The API key is kept in a SecretStr to prevent accidental logging.
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    Every field has a default so the package can be imported without any
    environment; a missing API key is reported when the client logs in.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # TheTVDB API
    tvdb_api_key: SecretStr | None = Field(
        default=None,
        description="TheTVDB v3 API key",
    )

    tvdb_language: str = Field(
        default="en",
        description="Language abbreviation sent as Accept-Language",
    )

    tvdb_base_url: str = Field(
        default="https://api.thetvdb.com/",
        description="Base URL of TheTVDB v3 REST API",
    )

    request_timeout: float = Field(
        default=15.0,
        description="HTTP request timeout in seconds",
        gt=0,
    )

    token_refresh_margin: int = Field(
        default=60,
        description="Renew the bearer token this many seconds before it expires",
        ge=0,
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    environment: str = Field(
        default="production",
        description="Environment name (development, production)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is development or production."""
        allowed = {"development", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v_lower

    @field_validator("tvdb_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Language abbreviations are lower case and never empty."""
        v = v.strip().lower()
        if not v:
            raise ValueError("tvdb_language must not be empty")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def has_api_key(self) -> bool:
        """Check if a TheTVDB API key is configured."""
        return self.tvdb_api_key is not None and bool(self.tvdb_api_key.get_secret_value())

    def get_safe_dict(self) -> dict[str, str | int | float | None]:
        """Get configuration as dict with sensitive values masked.

        Returns:
            Dictionary with SecretStr values shown as '***'
        """
        result = {}
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)

            if isinstance(value, SecretStr):
                result[field_name] = "***"
            else:
                result[field_name] = value

        return result


# Global settings instance
settings = Settings()
