"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

LASTFM_API_URL = "https://ws.audioscrobbler.com/2.0/"


# Hey future me, these settings are FROZEN. Each LastfmClient gets its own settings object at
# construction time and nothing can mutate it afterwards. Need another account? Build another
# LastfmSettings.
class LastfmSettings(BaseSettings):
    """Last.fm API credentials and client behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="LASTFM_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    api_key: str = Field(default="", description="Last.fm API key")
    api_secret: SecretStr = Field(
        default=SecretStr(""), description="Shared secret used to sign write calls"
    )
    username: str | None = Field(default=None, description="Account used for write calls")
    password: SecretStr | None = Field(default=None, description="Password for username")
    base_url: str = Field(default=LASTFM_API_URL, description="API root URL")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    reuse_sessions: bool = Field(
        default=False,
        description="Reuse a session key across write calls until Last.fm rejects it",
    )
    user_agent: str = Field(default="scrobblekit/0.1.0", description="User-Agent header")

    def is_configured(self) -> bool:
        """Check if read access is possible (API key present)."""
        return bool(self.api_key)

    def has_credentials(self) -> bool:
        """Check if everything needed for signed write calls is present."""
        return bool(
            self.api_key
            and self.api_secret.get_secret_value()
            and self.username
            and self.password
            and self.password.get_secret_value()
        )


class Settings(BaseSettings):
    """Top-level settings."""

    model_config = SettingsConfigDict(
        env_prefix="SCROBBLEKIT_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    app_name: str = Field(default="scrobblekit", description="Name written into JSON log lines")
    log_level: str = Field(default="INFO", description="Root log level")
    log_package_level: str | None = Field(
        default=None, description="Level for the scrobblekit loggers only (None = follow root)"
    )
    log_json: bool = Field(default=False, description="Emit JSON log lines")
    lastfm: LastfmSettings = Field(default_factory=LastfmSettings)


# Yo, cached so the environment is parsed once. The result is frozen, so sharing it is safe.
# Tests that fiddle with env vars must call get_settings.cache_clear() first!
@lru_cache
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return Settings()
