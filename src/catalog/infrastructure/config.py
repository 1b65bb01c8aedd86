import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_PROJECT_DIR = Path(__file__).resolve().parents[3]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from ``CATALOG_*`` environment variables."""

    # Persistence
    data_dir: Path = _PROJECT_DIR / "data"

    # Message bus
    bus_backend: Literal["redis", "memory"] = "redis"
    redis_url: str = "redis://localhost:6379/0"
    client_id: str = "catalog-service"
    consumer_group: str = "audit-log-group"
    consumer_name: str = "audit-worker"

    # Connection retry: bounded count, exponential backoff with a cap
    bus_retries: int = 8
    bus_backoff_base: float = 0.1
    bus_backoff_cap: float = 30.0

    bus_block_ms: int = 1000
    bus_batch_size: int = 10
    bus_max_stream_length: int = 10_000

    # Logging -- per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"          # Root / app-wide
    log_level_bus: str = "WARNING"   # redis client + bus adapters

    model_config = {
        "env_prefix": "CATALOG_",
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def categories_file(self) -> Path:
        return self.data_dir / "categories.json"

    @property
    def products_file(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def audit_log_file(self) -> Path:
        return self.data_dir / "audit_logs.json"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance -- reads .env once."""
    settings = Settings()
    _config_logger.debug("Settings loaded: bus_backend=%s data_dir=%s",
                         settings.bus_backend, settings.data_dir)
    return settings
