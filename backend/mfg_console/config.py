import logging
from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_BACKEND_KINDS = frozenset({"http", "local"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Manufacturing Console API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Master-data backend: "http" talks to the masters API, "local" uses the
    # persisted key-value store directly
    masters_backend: str = "local"
    masters_api_base_url: str = "http://localhost:8030/api/v1/masters"
    masters_api_timeout: float = 30.0

    # Local persistence (one JSON file per storage key)
    storage_dir: str = "data/storage"

    # Master-data cache behaviour
    cache_stale_seconds: float = 30.0
    list_retry_count: int = 1
    list_retry_delay: float = 1.0

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_masters: str = "INFO"          # master-data access layer
    log_level_storage: str = "INFO"          # local persistence

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fall back to the local backend when an unknown kind is configured."""
        if self.masters_backend not in _BACKEND_KINDS:
            _config_logger.warning(
                "Unknown masters_backend '%s', using 'local'", self.masters_backend
            )
            object.__setattr__(self, "masters_backend", "local")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
