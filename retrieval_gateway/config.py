"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Every setting has a default: the gateway starts against a local store out of the box

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Store paths configurable: the same gateway fronts stores that mount their
      API under different prefixes
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Backing store
    store_base_url: str = "http://localhost:8040"
    store_search_path: str = "/query/search"
    store_fetch_path: str = "/query/fetch/{hash}"
    store_health_path: str = "/actuator/health"
    store_timeout_seconds: float = 30.0
    store_max_retries: int = 2
    store_base_delay_ms: int = 200
    store_max_delay_ms: int = 5000

    @field_validator("store_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Paths are joined as base_url + path; a trailing slash would double up."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("store_fetch_path")
    @classmethod
    def fetch_path_has_hash(cls, v: str) -> str:
        if "{hash}" not in v:
            raise ValueError("store_fetch_path must contain a {hash} placeholder")
        return v

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
