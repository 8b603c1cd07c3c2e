"""Шаблон интеграции с API реального туроператора.

Параметры запроса и разбор ответа рассчитаны на типичный REST API
(Travelata, Level.Travel и т. п.) и подлежат уточнению по документации
конкретного поставщика.
"""

from __future__ import annotations

import math
from typing import Any

import httpx
from loguru import logger
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from app.tours.models import Guests, SearchCriteria, SpecificHotel, TourOffer
from app.tours.sources.base import (
    TourOperatorConfig,
    TourOperatorConfigurationError,
    TourOperatorResponseError,
    TourOperatorUnavailableError,
    return_date,
)

SEARCH_PATH = "/tours/search"


class LiveTourOperatorClient:
    def __init__(
        self,
        config: TourOperatorConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
            },
        )

    def is_configured(self) -> bool:
        return self._config.is_configured()

    async def close(self) -> None:
        await self._client.aclose()

    async def search_tours(self, criteria: SearchCriteria) -> list[TourOffer]:
        data = await self._request(SEARCH_PATH, payload=self._criteria_payload(criteria))
        return self._parse_offers(data, criteria)

    # ---- HTTP -----------------------------------------------------------

    async def _request(self, path: str, *, payload: dict[str, Any]) -> Any:
        if not self.is_configured():
            raise TourOperatorConfigurationError("Tour operator API key is not configured")

        try:
            async for attempt in AsyncRetrying(
                reraise=True,
                stop=stop_after_attempt(self._config.retry_attempts),
                wait=wait_exponential(multiplier=self._config.retry_backoff),
                retry=retry_if_exception_type(httpx.HTTPError),
                before_sleep=self._log_retry,
            ):
                with attempt:
                    response = await self._client.post(path, json=payload)
                    response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Tour operator HTTP {status} at {url}: {body}",
                status=exc.response.status_code,
                url=str(exc.request.url),
                body=exc.response.text,
            )
            raise TourOperatorUnavailableError(f"Tour operator API error: {exc}") from exc
        except httpx.HTTPError as exc:
            logger.error("Tour operator request failed: {error}", error=exc)
            raise TourOperatorUnavailableError(f"Tour operator API error: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise TourOperatorResponseError("Tour operator returned invalid JSON") from exc

    @staticmethod
    def _log_retry(retry_state: Any) -> None:
        outcome = retry_state.outcome
        logger.warning(
            "Tour operator request attempt {attempt} failed: {error}",
            attempt=retry_state.attempt_number,
            error=outcome.exception() if outcome is not None else None,
        )

    # ---- маппинг --------------------------------------------------------

    @staticmethod
    def _criteria_payload(criteria: SearchCriteria) -> dict[str, Any]:
        hotel_filter = criteria.hotel_filter
        specific = isinstance(hotel_filter, SpecificHotel)
        return {
            "departure_city": criteria.departure_city,
            "destination_country": criteria.destination_country,
            "destination_region": criteria.destination_region,
            "hotel_name": hotel_filter.name if specific else None,
            "hotel_filter": "specific" if specific else "all",
            "departure_date": criteria.departure_date.isoformat(),
            "nights": criteria.nights,
            "adults": criteria.guests.adults,
            "children": list(criteria.guests.children_ages),
        }

    def _parse_offers(self, data: Any, criteria: SearchCriteria) -> list[TourOffer]:
        if isinstance(data, list):
            items = data
        elif isinstance(data, dict):
            items = data.get("results") or []
        else:
            items = []
        if not isinstance(items, list):
            raise TourOperatorResponseError("Tour operator results must be a list")

        offers: list[TourOffer] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            offer = self._build_offer(item, criteria)
            if offer is not None:
                offers.append(offer)
        return offers

    def _build_offer(self, item: dict[str, Any], criteria: SearchCriteria) -> TourOffer | None:
        departure = criteria.departure_date.isoformat()
        nights = self._to_int(item.get("nights"))
        if nights is None:
            nights = criteria.nights

        raw_price = self._first_present(item, "total_price", "price")
        if raw_price is None:
            total_price = 0.0
        else:
            total_price = self._to_float(raw_price)
            if total_price is None or total_price < 0:
                logger.warning(
                    "Skipping tour offer {tour_id} with invalid price {price!r}",
                    tour_id=self._first_text(item, "id", "tour_id"),
                    price=raw_price,
                )
                return None

        return TourOffer(
            tour_id=self._first_text(item, "id", "tour_id"),
            tour_operator=self._first_text(item, "operator_name", "tour_operator"),
            hotel=self._first_text(item, "hotel_name", "hotel"),
            room_type=self._first_text(item, "room_type", "room"),
            departure_date=self._first_text(item, "departure_date") or departure,
            return_date=self._first_text(item, "return_date")
            or return_date(criteria.departure_date, criteria.nights),
            nights=nights,
            guests=Guests(
                adults=criteria.guests.adults,
                children_ages=criteria.guests.children_ages,
            ),
            total_price=total_price,
            currency=self._first_text(item, "currency") or "RUB",
            raw_data=item,
        )

    @staticmethod
    def _first_text(item: dict[str, Any], *keys: str) -> str:
        for key in keys:
            value = item.get(key)
            if value is not None and value != "":
                return str(value)
        return ""

    @staticmethod
    def _first_present(item: dict[str, Any], *keys: str) -> Any:
        for key in keys:
            value = item.get(key)
            if value is not None:
                return value
        return None

    @staticmethod
    def _to_int(value: Any) -> int | None:
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None

    @staticmethod
    def _to_float(value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        return number if math.isfinite(number) else None


__all__ = ["LiveTourOperatorClient"]
