"""Источники предложений туроператоров."""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from .base import (
    TourOperatorClient,
    TourOperatorConfig,
    TourOperatorConfigurationError,
    TourOperatorError,
    TourOperatorResponseError,
    TourOperatorUnavailableError,
    return_date,
)
from .live import LiveTourOperatorClient
from .mock import MockTourOperatorClient

if TYPE_CHECKING:
    from app.core.config import Settings


def build_tour_operator_client(settings: Settings) -> TourOperatorClient:
    """Выбирает источник предложений один раз при старте приложения."""

    if settings.tour_source == "live":
        config = settings.tour_operator_config()
        if not config.is_configured():
            logger.warning("Tour operator API is not configured: TOUR_API_KEY is empty")
        logger.info("Using live tour operator at {url}", url=config.base_url)
        return LiveTourOperatorClient(config)

    logger.info("Using mock tour operator")
    return MockTourOperatorClient(
        min_delay=settings.mock_min_delay,
        max_delay=settings.mock_max_delay,
    )


__all__ = [
    "TourOperatorClient",
    "TourOperatorConfig",
    "TourOperatorError",
    "TourOperatorConfigurationError",
    "TourOperatorUnavailableError",
    "TourOperatorResponseError",
    "LiveTourOperatorClient",
    "MockTourOperatorClient",
    "build_tour_operator_client",
    "return_date",
]
