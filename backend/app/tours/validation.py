"""Проверка тела запроса поиска туров.

Проверки идут по порядку полей и останавливаются на первой ошибке.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping

from app.tours.models import AnyHotel, Guests, HotelFilter, SearchCriteria, SpecificHotel

DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
MAX_CHILD_AGE = 17


class ValidationError(ValueError):
    """Запрос нарушает одно из правил валидации."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _as_int(value: Any) -> int | None:
    # bool является подклассом int, но в JSON это отдельный тип
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _require_text(payload: Mapping[str, Any], name: str) -> str:
    value = payload.get(name)
    if _is_blank(value):
        raise ValidationError(f"{name} is required and must be a non-empty string")
    return value


def _parse_hotel_filter(raw: Any) -> HotelFilter:
    if not isinstance(raw, Mapping):
        raise ValidationError("hotelFilter is required and must be an object")

    kind = raw.get("type")
    if kind == "all":
        return AnyHotel()
    if kind != "single":
        raise ValidationError('hotelFilter.type must be either "single" or "all"')

    name = raw.get("hotelName")
    if _is_blank(name):
        raise ValidationError('hotelFilter.hotelName is required when type is "single"')
    return SpecificHotel(name)


def _parse_departure_date(raw: Any, today: date) -> date:
    if not isinstance(raw, str) or not raw:
        raise ValidationError("departureDate is required and must be a string")
    if not DATE_RE.fullmatch(raw):
        raise ValidationError("departureDate must be in YYYY-MM-DD format")
    try:
        value = date.fromisoformat(raw)
    except ValueError:
        raise ValidationError("departureDate must be a valid calendar date") from None
    if value < today:
        raise ValidationError("departureDate must be today or a future date")
    return value


def _parse_guests(raw: Any) -> Guests:
    if not isinstance(raw, Mapping):
        raise ValidationError("guests is required and must be an object")

    adults = _as_int(raw.get("adults"))
    if adults is None or adults < 1:
        raise ValidationError("guests.adults must be a positive integer")

    children = raw.get("children")
    if not isinstance(children, list):
        raise ValidationError("guests.children must be an array")

    ages: list[int] = []
    for index, child in enumerate(children):
        if not isinstance(child, Mapping):
            raise ValidationError(f"guests.children[{index}] must be an object")
        age = _as_int(child.get("age"))
        if age is None or not 0 <= age <= MAX_CHILD_AGE:
            raise ValidationError(
                f"guests.children[{index}].age must be an integer between 0 and {MAX_CHILD_AGE}"
            )
        ages.append(age)

    return Guests(adults=adults, children_ages=tuple(ages))


def _parse_optional(payload: Mapping[str, Any], name: str, *, minimum: int, rule: str) -> int | None:
    if name not in payload:
        return None
    value = _as_int(payload[name])
    if value is None or value < minimum:
        raise ValidationError(f"{name} must be a {rule} integer if provided")
    return value


def validate_search_request(payload: Any, *, today: date | None = None) -> SearchCriteria:
    """Превращает сырое тело запроса в SearchCriteria или поднимает ValidationError."""

    if not isinstance(payload, Mapping):
        raise ValidationError("Request body is required and must be an object")

    departure_city = _require_text(payload, "departureCity")
    destination_country = _require_text(payload, "destinationCountry")
    destination_region = _require_text(payload, "destinationRegion")
    hotel_filter = _parse_hotel_filter(payload.get("hotelFilter"))
    departure_date = _parse_departure_date(payload.get("departureDate"), today or date.today())

    nights = _as_int(payload.get("nights"))
    if nights is None or nights < 1:
        raise ValidationError("nights must be a positive integer")

    guests = _parse_guests(payload.get("guests"))
    limit = _parse_optional(payload, "limit", minimum=1, rule="positive")
    offset = _parse_optional(payload, "offset", minimum=0, rule="non-negative")

    return SearchCriteria(
        departure_city=departure_city,
        destination_country=destination_country,
        destination_region=destination_region,
        hotel_filter=hotel_filter,
        departure_date=departure_date,
        nights=nights,
        guests=guests,
        limit=limit,
        offset=offset,
    )


__all__ = ["ValidationError", "validate_search_request"]
