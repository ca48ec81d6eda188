"""Application-wide configuration management using Pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Literal

import orjson
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration for the chart snapshot service."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    cmc_api_key: str | None = Field(None, alias="CMC_API_KEY")
    cmc_base_url: str = Field("https://pro-api.coinmarketcap.com", alias="CMC_BASE_URL")
    coingecko_api_key: str | None = Field(None, alias="COINGECKO_API_KEY")
    coingecko_base_url: str = Field("https://api.coingecko.com/api/v3", alias="COINGECKO_BASE_URL")
    binance_base_url: str = Field("https://api.binance.com", alias="BINANCE_BASE_URL")
    http_timeout_seconds: float = Field(10.0, alias="HTTP_TIMEOUT_SECONDS")

    chart_exchange: str = Field("BINANCE", alias="CHART_EXCHANGE")
    chart_theme: str = Field("light", alias="CHART_THEME")
    chart_timeframe: str = Field("1D", alias="CHART_TIMEFRAME")
    chart_window_days: int = Field(365, alias="CHART_WINDOW_DAYS")
    capture_viewport_width: int = Field(1920, alias="CAPTURE_VIEWPORT_WIDTH")
    capture_viewport_height: int = Field(1080, alias="CAPTURE_VIEWPORT_HEIGHT")
    capture_render_wait_ms: int = Field(4000, alias="CAPTURE_RENDER_WAIT_MS")
    capture_timeout_ms: int = Field(30000, alias="CAPTURE_TIMEOUT_MS")

    storage_backend: Literal["filesystem", "s3"] = Field("filesystem", alias="STORAGE_BACKEND")
    storage_root: Path = Field(Path("data/storage"), alias="STORAGE_ROOT")
    s3_bucket: str | None = Field(None, alias="S3_BUCKET")
    s3_endpoint_url: str | None = Field(None, alias="S3_ENDPOINT_URL")
    s3_region: str = Field("auto", alias="S3_REGION")
    s3_access_key_id: str | None = Field(None, alias="S3_ACCESS_KEY_ID")
    s3_secret_access_key: str | None = Field(None, alias="S3_SECRET_ACCESS_KEY")

    database_path: Path = Field(Path("data/snapshots.duckdb"), alias="DATABASE_PATH")
    logs_dir: Path = Field(Path("data/logs"), alias="LOGS_DIR")
    cache_dir: Path = Field(Path("data/cache"), alias="CACHE_DIR")
    exchange_info_ttl_seconds: int = Field(6 * 3600, alias="EXCHANGE_INFO_TTL_SECONDS")

    default_limit: int = Field(200, alias="DEFAULT_LIMIT")
    default_source: Literal["cmc", "cg", "both"] = Field("both", alias="DEFAULT_SOURCE")
    default_include_anonymized: bool = Field(True, alias="DEFAULT_INCLUDE_ANONYMIZED")
    fallback_symbols: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["BTC", "ETH", "ADA", "SOL"],
        alias="FALLBACK_SYMBOLS",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("fallback_symbols", mode="before")
    @classmethod
    def _split_symbols(cls, value: List[str] | str) -> List[str]:
        """Support comma-separated or JSON list symbol strings in environment variables."""

        if isinstance(value, str):
            value = orjson.loads(value) if value.strip().startswith("[") else value.split(",")
        return [str(symbol).strip().upper() for symbol in value if str(symbol).strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance loaded from environment variables."""

    return Settings()
