from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

from garagescout.pipeline_config import DEFAULT_MAPS_SEARCH_URL, MapLinkMode, MarkupFormat


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # API server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Client
    api_url: str = "http://localhost:8000"

    # Render pipeline defaults
    default_format: MarkupFormat = MarkupFormat.MARKDOWN
    default_map_link_mode: MapLinkMode = MapLinkMode.SEARCH
    maps_search_url: str = DEFAULT_MAPS_SEARCH_URL

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
