from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Literal, Union


@dataclass(frozen=True)
class AnyHotel:
    """Любой отель в регионе назначения."""

    type: Literal["all"] = field(default="all", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


@dataclass(frozen=True)
class SpecificHotel:
    """Конкретный отель; имя сравнивается без учёта регистра."""

    name: str
    type: Literal["single"] = field(default="single", init=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("SpecificHotel requires a non-empty name")

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "hotelName": self.name}


HotelFilter = Union[AnyHotel, SpecificHotel]


@dataclass(frozen=True)
class Guests:
    adults: int
    children_ages: tuple[int, ...] = ()

    @property
    def children(self) -> int:
        return len(self.children_ages)

    def to_dict(self) -> dict[str, Any]:
        return {
            "adults": self.adults,
            "children": [{"age": age} for age in self.children_ages],
        }


@dataclass(frozen=True)
class SearchCriteria:
    departure_city: str
    destination_country: str
    destination_region: str
    hotel_filter: HotelFilter
    departure_date: date
    nights: int
    guests: Guests
    limit: int | None = None
    offset: int | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "departureCity": self.departure_city,
            "destinationCountry": self.destination_country,
            "destinationRegion": self.destination_region,
            "hotelFilter": self.hotel_filter.to_dict(),
            "departureDate": self.departure_date.isoformat(),
            "nights": self.nights,
            "guests": self.guests.to_dict(),
        }
        if self.limit is not None:
            payload["limit"] = self.limit
        if self.offset is not None:
            payload["offset"] = self.offset
        return payload


@dataclass(frozen=True)
class TourOffer:
    tour_id: str
    tour_operator: str
    hotel: str
    room_type: str
    departure_date: str
    return_date: str
    nights: int
    guests: Guests
    total_price: float
    currency: str
    raw_data: Any = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "tourId": self.tour_id,
            "tourOperator": self.tour_operator,
            "hotel": self.hotel,
            "roomType": self.room_type,
            "departureDate": self.departure_date,
            "returnDate": self.return_date,
            "nights": self.nights,
            "guests": self.guests.to_dict(),
            "totalPrice": self.total_price,
            "currency": self.currency,
        }
        if self.raw_data is not None:
            payload["rawData"] = self.raw_data
        return payload


@dataclass(frozen=True)
class SearchResult:
    criteria: SearchCriteria
    results: tuple[TourOffer, ...]
    total: int
    limit: int
    offset: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "criteria": self.criteria.to_dict(),
            "results": [offer.to_dict() for offer in self.results],
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
        }


__all__ = [
    "AnyHotel",
    "SpecificHotel",
    "HotelFilter",
    "Guests",
    "SearchCriteria",
    "TourOffer",
    "SearchResult",
]
