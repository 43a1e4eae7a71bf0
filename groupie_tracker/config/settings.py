"""Application settings loaded from environment variables via pydantic-settings.

Two sources, highest priority first:

  1. Environment variables, e.g. ``FETCH_TIMEOUT=5``
  2. A ``.env`` file in the working directory

Field ``artists_url`` maps to env var ``ARTISTS_URL`` and so on.  Defaults
apply when neither source sets a value.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

_API_BASE = "https://groupietrackers.herokuapp.com/api"


class Settings(BaseSettings):
    """Groupie tracker settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Remote catalog ===
    artists_url: str = f"{_API_BASE}/artists"
    locations_url: str = f"{_API_BASE}/locations"
    dates_url: str = f"{_API_BASE}/dates"
    relations_url: str = f"{_API_BASE}/relation"
    fetch_timeout: float = 10.0  # seconds, applied to each of the four requests
    refresh_interval: float = 0.0  # seconds between re-fetches; 0 = fetch once at startup

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8080
    app_env: str = "development"
    log_level: str = "INFO"

    def source_urls(self) -> dict[str, str]:
        """Return the endpoint for each catalog section, keyed by section name."""
        return {
            "performers": self.artists_url,
            "venues": self.locations_url,
            "dates": self.dates_url,
            "relations": self.relations_url,
        }
