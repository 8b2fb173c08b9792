from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # weather-screen/

HG_WEATHER_URL = "https://api.hgbrasil.com/weather"
CORS_RELAY_URL = "https://cors-anywhere.herokuapp.com/"
CORS_RELAY_ACCESS_URL = "https://cors-anywhere.herokuapp.com/corsdemo"


class Settings(BaseSettings):
    """Application settings with validation.

    The weather API key is required and will raise a validation error if missing.
    Secrets must be provided via environment variables or .env file.

    Uses Pydantic v2 API:
    - model_config with SettingsConfigDict
    - @field_validator decorator
    """

    # API server settings
    api_host: str = Field(default="127.0.0.1", min_length=1, description="API server host (e.g., '0.0.0.0')")
    api_port: int = Field(ge=1, le=65535, default=8000, description="API server port")

    # Weather API - required
    weather_api_key: str = Field(min_length=1, description="HG Brasil weather API key")
    weather_api_url: str = Field(default=HG_WEATHER_URL, pattern=r"^https?://", description="HG Brasil weather endpoint")
    default_city: str = Field(default="Recife,PE", min_length=1, description="City shown when the screen first mounts")
    request_timeout: float = Field(default=10.0, gt=0, le=120, description="Outbound request timeout in seconds")

    # CORS relay - empty relay_url means the weather API is called directly
    relay_url: str = Field(default=CORS_RELAY_URL, description="Relay prefix prepended to the weather URL")
    relay_access_url: str = Field(
        default=CORS_RELAY_ACCESS_URL,
        pattern=r"^https?://",
        description="Page where temporary relay access is requested",
    )

    # Security
    trusted_hosts: str = Field(default="localhost,127.0.0.1", description="Comma-separated trusted host patterns")
    cors_origins: str = Field(default="http://localhost:8000", description="Comma-separated allowed CORS origins")

    log_level: str = Field(default="INFO", pattern=r"(?i)^(debug|info|warning|error|critical)$")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,  # Validate defaults too
    )

    @property
    def relay_enabled(self) -> bool:
        """Whether outbound requests are routed through the relay."""
        return bool(self.relay_url)

    @field_validator("api_host", "weather_api_key", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure value is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty")
        return v

    @field_validator("default_city", mode="after")
    @classmethod
    def validate_default_city(cls, v: str) -> str:
        """Ensure default_city is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("default_city must not be empty")
        return v

    @field_validator("relay_url", mode="after")
    @classmethod
    def validate_relay_url(cls, v: str) -> str:
        """Ensure relay_url is empty or an http(s) prefix ending with '/'."""
        v = v.strip()
        if not v:
            return ""
        if not v.startswith(("http://", "https://")):
            raise ValueError("relay_url must be empty or a valid http:// or https:// URL")
        if not v.endswith("/"):
            v = f"{v}/"
        return v


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance for dependency injection.

    This function creates a singleton to avoid re-reading .env file
    on every request. Use this with FastAPI's Depends() for
    dependency injection.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
