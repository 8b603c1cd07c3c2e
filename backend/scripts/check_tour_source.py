import asyncio
from datetime import timedelta
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.core.config import get_settings
from app.tours.models import AnyHotel, Guests, SearchCriteria
from app.tours.service import TourSearchService
from app.tours.sources import build_tour_operator_client


async def main() -> None:
    settings = get_settings()
    client = build_tour_operator_client(settings)
    criteria = SearchCriteria(
        departure_city="Москва",
        destination_country="Турция",
        destination_region="Анталья",
        hotel_filter=AnyHotel(),
        departure_date=settings.today() + timedelta(days=7),
        nights=7,
        guests=Guests(adults=2, children_ages=(5,)),
    )
    try:
        result = await TourSearchService(client, default_limit=5).search(criteria)
    finally:
        await client.close()

    print("Source:", settings.tour_source)
    print("Departure:", criteria.departure_date)
    print("Total:", result.total)
    for offer in result.results:
        print(offer.tour_id, offer.hotel, offer.total_price, offer.currency)


if __name__ == "__main__":
    asyncio.run(main())
