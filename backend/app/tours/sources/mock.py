"""Офлайн-источник туров для разработки и демонстрации.

Имитирует ответ туроператора: небольшая задержка и 5-20 случайных
предложений, совпадающих с критериями поиска.
"""

from __future__ import annotations

import asyncio
import random
import time

from loguru import logger

from app.tours.models import Guests, SearchCriteria, SpecificHotel, TourOffer
from app.tours.sources.base import return_date

MOCK_OPERATORS = (
    "Coral Travel",
    "TUI Россия",
    "Pegas Touristik",
    "TEZ TOUR",
    "Анекс Тур",
    "Библио Глобус",
    "Интурист",
)

MOCK_ROOM_TYPES = (
    "Standard Room, All Inclusive",
    "Superior Room, All Inclusive",
    "Deluxe Room, All Inclusive",
    "Family Room, All Inclusive",
    "Suite, All Inclusive",
    "Standard Room, Half Board",
    "Superior Room, Half Board",
)

HOTEL_PREFIXES = ("Grand", "Royal", "Sunset", "Paradise", "Crystal", "Golden", "Blue", "Green")
HOTEL_SUFFIXES = ("Resort", "Hotel", "Beach", "Palace", "Villa", "Club")

BASE_PRICE_PER_ADULT = 50_000
CHILD_PRICE_MULTIPLIER = 0.65
BASE_NIGHTS = 7


class MockTourOperatorClient:
    def __init__(
        self,
        *,
        min_delay: float = 0.3,
        max_delay: float = 0.8,
        rng: random.Random | None = None,
    ) -> None:
        self._min_delay = min_delay
        self._max_delay = max(min_delay, max_delay)
        self._rng = rng or random.Random()

    async def close(self) -> None:
        return None

    async def search_tours(self, criteria: SearchCriteria) -> list[TourOffer]:
        delay = self._rng.uniform(self._min_delay, self._max_delay)
        if delay > 0:
            await asyncio.sleep(delay)

        count = self._rng.randint(5, 20)
        stamp = int(time.time() * 1000)
        departure = criteria.departure_date.isoformat()
        offers: list[TourOffer] = []

        for index in range(count):
            base_price = self._base_price(criteria)
            total_price = round(base_price * (0.7 + self._rng.random() * 0.6))

            if isinstance(criteria.hotel_filter, SpecificHotel):
                hotel = criteria.hotel_filter.name
            else:
                hotel = self._hotel_name(criteria.destination_region)

            offers.append(
                TourOffer(
                    tour_id=f"TOUR-{stamp}-{index}",
                    tour_operator=self._rng.choice(MOCK_OPERATORS),
                    hotel=hotel,
                    room_type=self._rng.choice(MOCK_ROOM_TYPES),
                    departure_date=departure,
                    return_date=return_date(criteria.departure_date, criteria.nights),
                    nights=criteria.nights,
                    guests=Guests(
                        adults=criteria.guests.adults,
                        children_ages=criteria.guests.children_ages,
                    ),
                    total_price=total_price,
                    currency="RUB",
                )
            )

        logger.debug(
            "Mock tour operator generated {count} offers for {region}",
            count=len(offers),
            region=criteria.destination_region,
        )
        return offers

    def _base_price(self, criteria: SearchCriteria) -> int:
        adults = criteria.guests.adults
        price = float(BASE_PRICE_PER_ADULT * adults)
        for _ in criteria.guests.children_ages:
            price += price / adults * CHILD_PRICE_MULTIPLIER
        price *= criteria.nights / BASE_NIGHTS
        price *= 0.9 + self._rng.random() * 0.2
        return round(price)

    def _hotel_name(self, region: str) -> str:
        prefix = self._rng.choice(HOTEL_PREFIXES)
        suffix = self._rng.choice(HOTEL_SUFFIXES)
        return f"{prefix} {region} {suffix}"


__all__ = ["MockTourOperatorClient", "MOCK_OPERATORS", "MOCK_ROOM_TYPES"]
