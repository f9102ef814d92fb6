"""
Configuration settings for the insert benchmark.

Uses Pydantic Settings to load environment variables for the default
connection parameters, logging, and benchmark defaults. Values supplied on the
command line (or by any other caller) take precedence over these.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from insert_bench.domain.models import ConnectionConfig


class Settings(BaseSettings):
    # Database
    db_driver: str = Field("", alias="DB_DRIVER")
    db_url: str = Field("postgresql://localhost:5432/javabook", alias="DB_URL")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    target_table: str = Field("Temp", alias="TARGET_TABLE")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Benchmark defaults
    benchmark_rows: int = Field(1_000, alias="BENCHMARK_ROWS")
    results_dir: str = Field("results", alias="RESULTS_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def connection_config(self) -> ConnectionConfig:
        """Build the connection parameters described by these settings."""
        return ConnectionConfig(
            driver=self.db_driver,
            url=self.db_url,
            username=self.db_user,
            password=self.db_password,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
