from __future__ import annotations

import logging
from typing import Iterable, Sequence

from app.tours.models import SearchCriteria, SearchResult, SpecificHotel, TourOffer
from app.tours.sources.base import TourOperatorClient

DEFAULT_LIMIT = 20

logger = logging.getLogger(__name__)


def matches_criteria(offer: TourOffer, criteria: SearchCriteria) -> bool:
    """Точное совпадение предложения с критериями поиска."""

    if offer.departure_date != criteria.departure_date.isoformat():
        return False
    if offer.nights != criteria.nights:
        return False
    if offer.guests.adults != criteria.guests.adults:
        return False
    if offer.guests.children != criteria.guests.children:
        return False
    # возраст детей сравнивается как мультимножество
    if sorted(offer.guests.children_ages) != sorted(criteria.guests.children_ages):
        return False

    hotel_filter = criteria.hotel_filter
    if isinstance(hotel_filter, SpecificHotel):
        return offer.hotel.lower() == hotel_filter.name.lower()
    return True


def filter_offers(offers: Iterable[TourOffer], criteria: SearchCriteria) -> list[TourOffer]:
    return [offer for offer in offers if matches_criteria(offer, criteria)]


def sort_by_price(offers: Iterable[TourOffer]) -> list[TourOffer]:
    return sorted(offers, key=lambda offer: (offer.total_price, offer.tour_id))


def paginate(offers: Sequence[TourOffer], *, offset: int, limit: int) -> list[TourOffer]:
    return list(offers[offset : offset + limit])


def rank_offers(
    criteria: SearchCriteria,
    offers: Iterable[TourOffer],
    *,
    default_limit: int = DEFAULT_LIMIT,
) -> SearchResult:
    """Фильтрация, сортировка по цене и пагинация уже полученных предложений."""

    ranked = sort_by_price(filter_offers(offers, criteria))
    limit = criteria.limit if criteria.limit is not None else default_limit
    offset = criteria.offset if criteria.offset is not None else 0

    return SearchResult(
        criteria=criteria,
        results=tuple(paginate(ranked, offset=offset, limit=limit)),
        total=len(ranked),
        limit=limit,
        offset=offset,
    )


class TourSearchService:
    def __init__(self, client: TourOperatorClient, *, default_limit: int = DEFAULT_LIMIT) -> None:
        self._client = client
        self._default_limit = default_limit

    async def search(self, criteria: SearchCriteria) -> SearchResult:
        offers = await self._client.search_tours(criteria)
        result = rank_offers(criteria, offers, default_limit=self._default_limit)
        logger.info(
            "Tour search %s -> %s/%s: fetched=%s matched=%s returned=%s",
            criteria.departure_city,
            criteria.destination_country,
            criteria.destination_region,
            len(offers),
            result.total,
            len(result.results),
        )
        return result


__all__ = [
    "TourSearchService",
    "matches_criteria",
    "filter_offers",
    "sort_by_price",
    "paginate",
    "rank_offers",
]
