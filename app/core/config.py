from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APP_",
        case_sensitive=False,
    )

    env: str = Field(default="development")
    debug: bool = Field(default=False)
    docs_enabled: bool = Field(default=True)
    log_level: str = Field(default="INFO", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    secret_key: str = Field(min_length=32)

    cors_origins: list[str] = Field(default_factory=list)
    trusted_hosts: list[str] = Field(default_factory=lambda: ["localhost", "127.0.0.1"])

    session_cookie: str = Field(default="weather_query_session", min_length=1, max_length=64)
    session_max_age_seconds: int = Field(default=60 * 60 * 8, ge=60, le=60 * 60 * 24 * 30)

    database_url: str = Field(default="sqlite:///./weather_queries.db", min_length=1)
    database_echo: bool = Field(default=False)
    database_pool_size: int = Field(default=5, ge=1, le=100)
    database_max_overflow: int = Field(default=10, ge=0, le=100)
    database_create_tables: bool = Field(default=True)

    openweather_api_key: str = Field(min_length=1)
    openweather_base_url: AnyHttpUrl = Field(default="https://api.openweathermap.org/data/2.5")
    weather_units: str = Field(default="metric", pattern=r"^(metric|imperial|standard)$")
    weather_timeout_seconds: float = Field(default=10.0, ge=1.0, le=30.0)
    forecast_days: int = Field(default=5, ge=1, le=5)
    queries_fetch_weather: bool = Field(default=True)

    @property
    def is_production(self) -> bool:
        return self.env.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def load_settings() -> Settings:
    settings = Settings()
    if not settings.cors_origins:
        settings.cors_origins = ["http://localhost:3000", "http://localhost:8000"]
    return settings
