from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.tours.models import SearchCriteria, TourOffer


class TourOperatorError(RuntimeError):
    """Базовая ошибка взаимодействия с туроператором."""


class TourOperatorConfigurationError(TourOperatorError):
    """Ошибка конфигурации или авторизации туроператора."""


class TourOperatorUnavailableError(TourOperatorError):
    """Туроператор недоступен или вернул ошибку HTTP после всех повторов."""


class TourOperatorResponseError(TourOperatorError):
    """Ответ туроператора не удалось разобрать."""


@dataclass(frozen=True)
class TourOperatorConfig:
    base_url: str
    api_key: str = ""
    timeout: float = 30.0
    retry_attempts: int = 3
    retry_backoff: float = 2.0

    def is_configured(self) -> bool:
        return bool(self.api_key)


@runtime_checkable
class TourOperatorClient(Protocol):
    """Источник предложений: получает критерии и возвращает неотфильтрованные туры."""

    async def search_tours(self, criteria: SearchCriteria) -> list[TourOffer]: ...

    async def close(self) -> None: ...


def return_date(departure: date | str, nights: int) -> str:
    """Дата возвращения; пустая строка, если она выходит за пределы календаря (после 9999 года)."""

    if isinstance(departure, str):
        departure = date.fromisoformat(departure)
    try:
        return (departure + timedelta(days=nights)).isoformat()
    except OverflowError:
        return ""


__all__ = [
    "TourOperatorClient",
    "TourOperatorConfig",
    "TourOperatorError",
    "TourOperatorConfigurationError",
    "TourOperatorUnavailableError",
    "TourOperatorResponseError",
    "return_date",
]
