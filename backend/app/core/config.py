from __future__ import annotations

from datetime import date, datetime
from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.tours.sources.base import TourOperatorConfig


class Settings(BaseSettings):
    """Конфигурация сервиса поиска туров на основе переменных окружения."""

    port: int = Field(3000, alias="PORT")
    host: str = Field("0.0.0.0", alias="HOST")
    app_env: Literal["dev", "prod", "test"] = Field("dev", alias="APP_ENV")
    api_prefix: str = Field("/api", alias="API_PREFIX")
    service_name: str = Field("tour-package-search", alias="SERVICE_NAME")

    tour_source: Literal["mock", "live"] = Field(
        "mock",
        alias="TOUR_SOURCE",
        description="Источник предложений: mock для разработки, live для реального API",
    )
    tour_api_base_url: AnyHttpUrl = Field(
        "https://api.example-tour-operator.com/v1", alias="TOUR_API_BASE_URL"
    )
    tour_api_key: str = Field("", alias="TOUR_API_KEY")
    tour_api_timeout: float = Field(
        30.0,
        alias="TOUR_API_TIMEOUT",
        description="Таймаут запроса к туроператору (секунды)",
    )
    tour_api_retry_attempts: int = Field(3, ge=1, alias="TOUR_API_RETRY_ATTEMPTS")
    tour_api_retry_backoff: float = Field(
        2.0,
        ge=0,
        alias="TOUR_API_RETRY_BACKOFF",
        description="Базовая пауза экспоненциального backoff (секунды)",
    )

    mock_min_delay: float = Field(0.3, ge=0, alias="MOCK_MIN_DELAY")
    mock_max_delay: float = Field(0.8, ge=0, alias="MOCK_MAX_DELAY")

    default_results_limit: int = Field(20, ge=1, alias="DEFAULT_RESULTS_LIMIT")

    timezone: str | None = Field(
        None,
        alias="TIMEZONE",
        description="Часовой пояс для определения «сегодня»; по умолчанию локальное время сервера",
    )

    static_dir: str = Field("public", alias="STATIC_DIR")
    allowed_origins: str = Field("*", alias="ALLOWED_ORIGINS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str | None) -> str | None:
        if not value:
            return None
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown time zone: {value}") from exc
        return value

    @property
    def include_error_details(self) -> bool:
        return self.app_env == "dev"

    def origins(self) -> list[str]:
        items = [part.strip() for part in self.allowed_origins.split(",")]
        return [item for item in items if item] or ["*"]

    def today(self) -> date:
        if self.timezone:
            return datetime.now(ZoneInfo(self.timezone)).date()
        return date.today()

    def tour_operator_config(self) -> TourOperatorConfig:
        return TourOperatorConfig(
            base_url=str(self.tour_api_base_url).rstrip("/"),
            api_key=self.tour_api_key,
            timeout=self.tour_api_timeout,
            retry_attempts=self.tour_api_retry_attempts,
            retry_backoff=self.tour_api_retry_backoff,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
