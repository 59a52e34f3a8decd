import math
from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from framework.exceptions.handler import BusinessException, NotFoundException
from framework.logging.logger import get_logger
from framework.response import ResponseModel
from apps.unit_of_work import MarketplaceUnitOfWork
from .models import Airport
from .schemas import CreateAirportDto, UpdateAirportDto, to_airport_dto

logger = get_logger("airport_service")

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: Decimal, lon1: Decimal, lat2: Decimal, lon2: Decimal) -> float:
    """Great-circle distance between two coordinates in kilometres."""
    d_lat = math.radians(float(lat2 - lat1))
    d_lon = math.radians(float(lon2 - lon1))
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(float(lat1))) * math.cos(math.radians(float(lat2))) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class AirportService:
    """Airport catalogue operations on top of the unit of work."""

    def __init__(self, uow: MarketplaceUnitOfWork):
        self.uow = uow

    async def list_airports(
        self,
        page: int,
        page_size: int,
        country: Optional[str] = None,
        city: Optional[str] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = True,
    ) -> dict:
        """Paged list sorted by name; returns the paged envelope."""
        airports, total = await self.uow.airports.list_page(
            page, page_size, country=country, city=city, search=search, is_active=is_active
        )
        logger.info(f"Retrieved {len(airports)} of {total} airports for page {page}")
        return ResponseModel.paged([to_airport_dto(a) for a in airports], total, page, page_size)

    async def search(self, query: str, limit: int = 10) -> List[dict]:
        if not query or not query.strip():
            raise BusinessException("Search query is required", status_code=400, code=400)
        airports = await self.uow.airports.search_active(query.strip(), limit=limit)
        logger.info(f"Found {len(airports)} airports matching query {query!r}")
        return [to_airport_dto(a) for a in airports]

    async def nearby(
        self, latitude: Decimal, longitude: Decimal, radius_km: int = 100, limit: int = 10
    ) -> List[dict]:
        """Active airports within the radius, closest first, with their distance."""
        candidates = []
        for airport in await self.uow.airports.find(is_active=True):
            distance = haversine_km(latitude, longitude, airport.latitude, airport.longitude)
            if distance <= radius_km:
                candidates.append((distance, airport))
        candidates.sort(key=lambda pair: pair[0])
        logger.info(
            f"Found {len(candidates)} airports within {radius_km}km of ({latitude}, {longitude})"
        )
        return [
            {"airport": to_airport_dto(airport), "distance_km": round(distance, 2)}
            for distance, airport in candidates[:limit]
        ]

    async def list_countries(self) -> List[str]:
        return await self.uow.airports.list_countries()

    async def list_cities(self, country: str) -> List[str]:
        cities = await self.uow.airports.list_cities(country)
        logger.info(f"Retrieved {len(cities)} cities in {country}")
        return cities

    async def _get_or_404(self, airport_id: UUID) -> Airport:
        airport = await self.uow.airports.get_by_id(airport_id)
        if airport is None:
            raise NotFoundException("Airport not found")
        return airport

    async def get_airport(self, airport_id: UUID) -> dict:
        return to_airport_dto(await self._get_or_404(airport_id))

    async def get_by_iata(self, iata_code: str) -> dict:
        airport = await self.uow.airports.get_by_iata(iata_code)
        if airport is None:
            raise NotFoundException("Airport not found")
        return to_airport_dto(airport)

    async def create_airport(self, data: CreateAirportDto) -> dict:
        # the unique index also covers soft-deleted rows
        if await self.uow.airports.iata_in_use(data.iata_code):
            raise BusinessException(
                f"Airport with IATA code {data.iata_code} already exists", status_code=400, code=400
            )
        airport = await self.uow.airports.add(Airport(**data.model_dump()))
        await self.uow.save_changes()
        logger.info(f"Airport {airport.iata_code} created (id={airport.id})")
        return to_airport_dto(airport)

    async def update_airport(self, airport_id: UUID, data: UpdateAirportDto) -> dict:
        airport = await self._get_or_404(airport_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(airport, field, value)
        await self.uow.airports.update(airport)
        await self.uow.save_changes()
        logger.info(f"Airport {airport.iata_code} updated: {sorted(changes)}")
        return to_airport_dto(airport)

    async def deactivate_airport(self, airport_id: UUID) -> dict:
        airport = await self._get_or_404(airport_id)
        airport.is_active = False
        await self.uow.airports.update(airport)
        await self.uow.save_changes()
        logger.info(f"Airport {airport.iata_code} deactivated")
        return to_airport_dto(airport)

    async def delete_airport(self, airport_id: UUID) -> None:
        if not await self.uow.airports.soft_delete(airport_id):
            raise NotFoundException("Airport not found")
        await self.uow.save_changes()
        logger.info(f"Airport {airport_id} soft deleted")
