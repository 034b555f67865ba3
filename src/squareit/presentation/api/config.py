"""Settings as seen by the API; tests override ``get_api_settings``."""

from functools import lru_cache

from squareit_config.settings import Settings, get_settings


@lru_cache
def get_api_settings() -> Settings:
    return get_settings()
