from datetime import datetime
from typing import Optional
from uuid import UUID
from framework.database.entity import as_utc
from framework.exceptions.handler import BusinessException, NotFoundException
from framework.logging.logger import get_logger
from framework.repository.base import BaseRepository
from framework.response import ResponseModel
from apps.unit_of_work import MarketplaceUnitOfWork
from .models import Flight, FlightStatus
from .schemas import CreateFlightDto, FlightSearchParams, UpdateFlightDto, to_flight_dto

logger = get_logger("flight_service")


class FlightService:
    def __init__(self, uow: MarketplaceUnitOfWork):
        self.uow = uow

    async def search(
        self,
        params: FlightSearchParams,
        page: int,
        page_size: int,
        now: Optional[datetime] = None,
    ) -> dict:
        """
        Search bookable flights.

        Unknown IATA codes match nothing, so the result is an empty page
        rather than an error.
        """
        BaseRepository.validate_paging(page, page_size)
        departure_airport_id = arrival_airport_id = None
        if params.departure_airport:
            airport = await self.uow.airports.get_by_iata(params.departure_airport)
            if airport is None:
                return ResponseModel.paged([], 0, page, page_size)
            departure_airport_id = airport.id
        if params.arrival_airport:
            airport = await self.uow.airports.get_by_iata(params.arrival_airport)
            if airport is None:
                return ResponseModel.paged([], 0, page, page_size)
            arrival_airport_id = airport.id

        flights, total = await self.uow.flights.search(
            page,
            page_size,
            departure_airport_id=departure_airport_id,
            arrival_airport_id=arrival_airport_id,
            departure_from=as_utc(params.departure_from),
            departure_to=as_utc(params.departure_to),
            passenger_count=params.passenger_count,
            min_price=params.min_price,
            max_price=params.max_price,
            sort_by=params.sort_by,
            descending=params.sort_descending,
            now=as_utc(now),
        )
        logger.info(f"Flight search returned {len(flights)} of {total} results")
        return ResponseModel.paged([to_flight_dto(f) for f in flights], total, page, page_size)

    async def get_flight(self, flight_id: UUID) -> dict:
        flight = await self.uow.flights.get_by_id(flight_id)
        if flight is None:
            raise NotFoundException("Flight not found")
        return to_flight_dto(flight)

    async def create_flight(self, data: CreateFlightDto) -> dict:
        for airport_id in (data.departure_airport_id, data.arrival_airport_id):
            if await self.uow.airports.get_by_id(airport_id) is None:
                raise BusinessException(f"Airport {airport_id} not found", status_code=400, code=400)
        if await self.uow.companies.get_by_id(data.company_id) is None:
            raise BusinessException(f"Company {data.company_id} not found", status_code=400, code=400)

        aircraft = await self.uow.aircraft.get_for_company(data.aircraft_id, data.company_id)
        if aircraft is None:
            raise BusinessException(
                "Aircraft not found or does not belong to the company", status_code=400, code=400
            )
        if data.available_seats > aircraft.capacity:
            raise BusinessException(
                f"Available seats ({data.available_seats}) exceed aircraft capacity ({aircraft.capacity})",
                status_code=400,
                code=400,
            )

        flight = Flight(
            **data.model_dump(exclude={"departure_time", "arrival_time"}),
            departure_time=as_utc(data.departure_time),
            arrival_time=as_utc(data.arrival_time),
            current_price=data.base_price,
            total_seats=data.available_seats,
            status=FlightStatus.AVAILABLE,
        )
        await self.uow.flights.add(flight)
        await self.uow.save_changes()
        logger.info(f"Flight {flight.flight_number} created (id={flight.id})")
        return to_flight_dto(flight)

    async def update_flight(self, flight_id: UUID, data: UpdateFlightDto) -> dict:
        """Apply a partial update; a new base price also resets the current price."""
        flight = await self.uow.flights.get_by_id(flight_id)
        if flight is None:
            raise NotFoundException("Flight not found")

        changes = data.model_dump(exclude_unset=True)
        for field in ("departure_time", "arrival_time"):
            if field in changes:
                changes[field] = as_utc(changes[field])
        if "base_price" in changes:
            changes["current_price"] = changes["base_price"]

        departure = changes.get("departure_time", as_utc(flight.departure_time))
        arrival = changes.get("arrival_time", as_utc(flight.arrival_time))
        if arrival <= departure:
            raise BusinessException("arrival_time must be after departure_time", status_code=400, code=400)
        if "departure_time" in changes or "arrival_time" in changes:
            changes.update(departure_time=departure, arrival_time=arrival)
        minimum_price = changes.get("minimum_price", flight.minimum_price)
        base_price = changes.get("base_price", flight.base_price)
        if minimum_price is not None and minimum_price > base_price:
            raise BusinessException("minimum_price cannot exceed base_price", status_code=400, code=400)
        if "available_seats" in changes:
            aircraft = await self.uow.aircraft.get_by_id(flight.aircraft_id)
            if aircraft is not None and changes["available_seats"] > aircraft.capacity:
                raise BusinessException(
                    f"Available seats ({changes['available_seats']}) exceed aircraft capacity ({aircraft.capacity})",
                    status_code=400,
                    code=400,
                )

        for field, value in changes.items():
            setattr(flight, field, value)
        await self.uow.flights.update(flight)
        await self.uow.save_changes()
        logger.info(f"Flight {flight.flight_number} updated: {sorted(changes)}")
        return to_flight_dto(flight)

    async def delete_flight(self, flight_id: UUID) -> None:
        if not await self.uow.flights.soft_delete(flight_id):
            raise NotFoundException("Flight not found")
        await self.uow.save_changes()
        logger.info(f"Flight {flight_id} soft deleted")
