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


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Alfred Dashboard API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./alfred.db"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_realtime: str = "INFO"         # NotificationHub + transports
    log_level_broadcaster: str = "INFO"      # SyntheticBroadcaster ticks

    # Rate limiting (per client ip + path)
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 900
    rate_limit_min_interval_ms: int = 100

    # Realtime
    realtime_queue_size: int = 256
    synthetic_broadcast_enabled: bool = True
    synthetic_broadcast_interval_seconds: float = 120.0

    # Demo data written on first start when the projects table is empty
    seed_demo_data: bool = True

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    def model_post_init(self, __context: object) -> None:
        if self.rate_limit_min_interval_ms < 0:
            _config_logger.warning(
                "RATE_LIMIT_MIN_INTERVAL_MS=%s is negative, using 0",
                self.rate_limit_min_interval_ms,
            )
            object.__setattr__(self, "rate_limit_min_interval_ms", 0)


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
