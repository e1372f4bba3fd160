"""Environment-driven settings for the dashboard and its API."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from validator_dash.errors import ConfigError

load_dotenv()

DEFAULT_UPSTREAM_BASE_URL = "https://hoodi-rpc.interstate.so"
DEFAULT_API_URLS = "https://dashboard.interstate.so,https://directory-validators.vercel.app"


@dataclass(frozen=True)
class Settings:
    database_url: str | None
    database_ssl: bool
    db_pool_min_size: int
    db_pool_max_size: int
    upstream_base_url: str
    local_api_url: str | None
    remote_api_urls: tuple[str, ...]
    http_timeout_seconds: float
    validator_multiplier: int
    total_network_validators: int
    blocks_per_day: int
    table_page_size: int
    operator_batch_size: int
    mainnet_tx_limit: int
    stats_refresh_seconds: int
    log_level: str
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def api_bases(self) -> list[str]:
        """API base URLs in the order they should be tried."""
        bases = [self.local_api_url] if self.local_api_url else []
        bases.extend(url for url in self.remote_api_urls if url not in bases)
        return bases


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _split_urls(raw: str) -> tuple[str, ...]:
    return tuple(part.strip().rstrip("/") for part in raw.split(",") if part.strip())


def validate_settings(settings: Settings) -> None:
    if settings.db_pool_min_size <= 0:
        raise ConfigError("DB_POOL_MIN_SIZE must be > 0")
    if settings.db_pool_max_size < settings.db_pool_min_size:
        raise ConfigError("DB_POOL_MAX_SIZE must be >= DB_POOL_MIN_SIZE")
    if settings.http_timeout_seconds <= 0:
        raise ConfigError("HTTP_TIMEOUT_SECONDS must be > 0")
    if settings.validator_multiplier <= 0:
        raise ConfigError("VALIDATOR_MULTIPLIER must be > 0")
    if settings.total_network_validators <= 0:
        raise ConfigError("TOTAL_NETWORK_VALIDATORS must be > 0")
    if settings.blocks_per_day <= 0:
        raise ConfigError("BLOCKS_PER_DAY must be > 0")
    if settings.table_page_size <= 0:
        raise ConfigError("TABLE_PAGE_SIZE must be > 0")
    if settings.operator_batch_size <= 0:
        raise ConfigError("OPERATOR_BATCH_SIZE must be > 0")
    if settings.mainnet_tx_limit <= 0:
        raise ConfigError("MAINNET_TX_LIMIT must be > 0")
    if settings.stats_refresh_seconds <= 0:
        raise ConfigError("STATS_REFRESH_SECONDS must be > 0")
    if not 0 < settings.api_port < 65536:
        raise ConfigError("API_PORT must be between 1 and 65535")
    if not settings.api_bases:
        raise ConfigError("No dashboard API URL configured")


def load_settings() -> Settings:
    local_api = os.environ.get("DASHBOARD_LOCAL_API", "").strip().rstrip("/")
    settings = Settings(
        database_url=os.environ.get("DATABASE_URL") or None,
        database_ssl=_env_bool("DATABASE_SSL"),
        db_pool_min_size=_env_int("DB_POOL_MIN_SIZE", 1),
        db_pool_max_size=_env_int("DB_POOL_MAX_SIZE", 10),
        upstream_base_url=os.environ.get("UPSTREAM_BASE_URL", DEFAULT_UPSTREAM_BASE_URL).rstrip("/"),
        local_api_url=local_api or None,
        remote_api_urls=_split_urls(os.environ.get("DASHBOARD_API_URLS", DEFAULT_API_URLS)),
        http_timeout_seconds=_env_float("HTTP_TIMEOUT_SECONDS", 10.0),
        validator_multiplier=_env_int("VALIDATOR_MULTIPLIER", 3),
        total_network_validators=_env_int("TOTAL_NETWORK_VALIDATORS", 1147275),
        blocks_per_day=_env_int("BLOCKS_PER_DAY", 7200),
        table_page_size=_env_int("TABLE_PAGE_SIZE", 1000),
        operator_batch_size=_env_int("OPERATOR_BATCH_SIZE", 1000),
        mainnet_tx_limit=_env_int("MAINNET_TX_LIMIT", 100),
        stats_refresh_seconds=_env_int("STATS_REFRESH_SECONDS", 6 * 60 * 60),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        api_host=os.environ.get("API_HOST", "0.0.0.0").strip() or "0.0.0.0",
        api_port=_env_int("API_PORT", 8000),
    )
    validate_settings(settings)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
