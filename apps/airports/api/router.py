from decimal import Decimal
from fastapi import APIRouter, Depends, Query
from typing import Optional
from uuid import UUID
from framework.response import ResponseModel
from apps.dependencies import PageParams, get_page_params, get_uow
from apps.unit_of_work import MarketplaceUnitOfWork
from ..schemas import CreateAirportDto, UpdateAirportDto
from ..service import AirportService

router = APIRouter()


def get_airport_service(uow: MarketplaceUnitOfWork = Depends(get_uow)) -> AirportService:
    """Dependency: create AirportService."""
    return AirportService(uow)


@router.get("/")
async def list_airports(
    paging: PageParams = Depends(get_page_params),
    country: Optional[str] = None,
    city: Optional[str] = None,
    search: Optional[str] = None,
    is_active: Optional[bool] = True,
    service: AirportService = Depends(get_airport_service)
):
    """Paged airport list, filterable by country, city and free text."""
    return await service.list_airports(
        paging.page, paging.page_size,
        country=country, city=city, search=search, is_active=is_active
    )


@router.get("/search")
async def search_airports(
    query: str = Query(default=""),
    limit: int = Query(default=10, ge=1, le=50),
    service: AirportService = Depends(get_airport_service)
):
    """Autocomplete search over active airports."""
    airports = await service.search(query, limit=limit)
    return ResponseModel.success(data=airports)


@router.get("/countries")
async def list_countries(service: AirportService = Depends(get_airport_service)):
    countries = await service.list_countries()
    return ResponseModel.success(data=countries)


@router.get("/countries/{country}/cities")
async def list_cities(country: str, service: AirportService = Depends(get_airport_service)):
    cities = await service.list_cities(country)
    return ResponseModel.success(data=cities)


@router.get("/nearby")
async def nearby_airports(
    latitude: Decimal = Query(ge=-90, le=90),
    longitude: Decimal = Query(ge=-180, le=180),
    radius_km: int = Query(default=100, ge=1, le=20000),
    limit: int = Query(default=10, ge=1, le=50),
    service: AirportService = Depends(get_airport_service)
):
    """Active airports within radius_km of the point, closest first."""
    airports = await service.nearby(latitude, longitude, radius_km=radius_km, limit=limit)
    return ResponseModel.success(data=airports)


@router.get("/iata/{iata_code}")
async def get_airport_by_iata(
    iata_code: str,
    service: AirportService = Depends(get_airport_service)
):
    airport = await service.get_by_iata(iata_code)
    return ResponseModel.success(data=airport)


@router.get("/{airport_id}")
async def get_airport(
    airport_id: UUID,
    service: AirportService = Depends(get_airport_service)
):
    airport = await service.get_airport(airport_id)
    return ResponseModel.success(data=airport)


@router.post("/")
async def create_airport(
    payload: CreateAirportDto,
    service: AirportService = Depends(get_airport_service)
):
    airport = await service.create_airport(payload)
    return ResponseModel.success(data=airport, message="Airport created")


@router.put("/{airport_id}")
async def update_airport(
    airport_id: UUID,
    payload: UpdateAirportDto,
    service: AirportService = Depends(get_airport_service)
):
    airport = await service.update_airport(airport_id, payload)
    return ResponseModel.success(data=airport, message="Airport updated")


@router.patch("/{airport_id}/deactivate")
async def deactivate_airport(
    airport_id: UUID,
    service: AirportService = Depends(get_airport_service)
):
    airport = await service.deactivate_airport(airport_id)
    return ResponseModel.success(data=airport, message="Airport deactivated")


@router.delete("/{airport_id}")
async def delete_airport(
    airport_id: UUID,
    service: AirportService = Depends(get_airport_service)
):
    """Soft delete; the airport disappears from every query afterwards."""
    await service.delete_airport(airport_id)
    return ResponseModel.success(message="Airport deleted")
