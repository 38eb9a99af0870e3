"""Route dependencies resolving settings and the storage container."""

from functools import lru_cache

from lagom import Container

from infrastructure.config import Settings
from infrastructure.di.container import create_container


@lru_cache
def get_settings() -> Settings:
    """Settings read from the environment once per process."""
    return Settings()


@lru_cache
def get_container() -> Container:
    """Container over the configured data directory, shared by every request."""
    return create_container(get_settings())
