from fastapi import APIRouter, Depends, Query
from typing import Annotated
from uuid import UUID
from framework.response import ResponseModel
from apps.dependencies import PageParams, get_page_params, get_uow
from apps.unit_of_work import MarketplaceUnitOfWork
from ..schemas import CreateFlightDto, FlightSearchParams, UpdateFlightDto
from ..service import FlightService

router = APIRouter()


def get_flight_service(uow: MarketplaceUnitOfWork = Depends(get_uow)) -> FlightService:
    """Dependency: create FlightService."""
    return FlightService(uow)


@router.get("/search")
async def search_flights(
    params: Annotated[FlightSearchParams, Query()],
    paging: PageParams = Depends(get_page_params),
    service: FlightService = Depends(get_flight_service)
):
    """Available future flights matching route, dates, seats and price."""
    return await service.search(params, paging.page, paging.page_size)


@router.get("/{flight_id}")
async def get_flight(
    flight_id: UUID,
    service: FlightService = Depends(get_flight_service)
):
    flight = await service.get_flight(flight_id)
    return ResponseModel.success(data=flight)


@router.post("/")
async def create_flight(
    payload: CreateFlightDto,
    service: FlightService = Depends(get_flight_service)
):
    flight = await service.create_flight(payload)
    return ResponseModel.success(data=flight, message="Flight created")


@router.put("/{flight_id}")
async def update_flight(
    flight_id: UUID,
    payload: UpdateFlightDto,
    service: FlightService = Depends(get_flight_service)
):
    flight = await service.update_flight(flight_id, payload)
    return ResponseModel.success(data=flight, message="Flight updated")


@router.delete("/{flight_id}")
async def delete_flight(
    flight_id: UUID,
    service: FlightService = Depends(get_flight_service)
):
    await service.delete_flight(flight_id)
    return ResponseModel.success(message="Flight deleted")
