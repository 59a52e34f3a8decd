"""Flight DTOs and entity mapping."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from .models import Flight, FlightStatus


class FlightDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    flight_number: str
    departure_time: datetime
    arrival_time: datetime
    duration_minutes: int
    base_price: Decimal
    current_price: Decimal
    minimum_price: Optional[Decimal] = None
    available_seats: int
    total_seats: int
    status: FlightStatus
    description: Optional[str] = None
    special_instructions: Optional[str] = None
    allows_automatic_pricing: bool
    departure_airport_id: UUID
    arrival_airport_id: UUID
    aircraft_id: UUID
    company_id: UUID
    created_at: datetime
    updated_at: datetime


class CreateFlightDto(BaseModel):
    flight_number: str = Field(min_length=1, max_length=20)
    departure_airport_id: UUID
    arrival_airport_id: UUID
    aircraft_id: UUID
    company_id: UUID
    departure_time: datetime
    arrival_time: datetime
    base_price: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    minimum_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=18, decimal_places=2)
    available_seats: int = Field(ge=1, le=1000)
    description: Optional[str] = Field(default=None, max_length=2000)
    special_instructions: Optional[str] = Field(default=None, max_length=1000)
    allows_automatic_pricing: bool = True

    @model_validator(mode="after")
    def check_route_and_schedule(self):
        if self.arrival_time <= self.departure_time:
            raise ValueError("arrival_time must be after departure_time")
        if self.departure_airport_id == self.arrival_airport_id:
            raise ValueError("departure and arrival airports must differ")
        if self.minimum_price is not None and self.minimum_price > self.base_price:
            raise ValueError("minimum_price cannot exceed base_price")
        return self


class UpdateFlightDto(BaseModel):
    """Partial update; only fields present in the payload are applied."""
    flight_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    base_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=18, decimal_places=2)
    minimum_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=18, decimal_places=2)
    available_seats: Optional[int] = Field(default=None, ge=0, le=1000)
    status: Optional[FlightStatus] = None
    description: Optional[str] = Field(default=None, max_length=2000)
    special_instructions: Optional[str] = Field(default=None, max_length=1000)
    allows_automatic_pricing: Optional[bool] = None

    @field_validator(
        "flight_number", "departure_time", "arrival_time", "base_price",
        "available_seats", "status", "allows_automatic_pricing",
    )
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class FlightSearchParams(BaseModel):
    """Query parameters for flight search; airports are given as IATA codes."""
    departure_airport: Optional[str] = None
    arrival_airport: Optional[str] = None
    departure_from: Optional[datetime] = None
    departure_to: Optional[datetime] = None
    passenger_count: Optional[int] = Field(default=None, ge=1)
    min_price: Optional[Decimal] = Field(default=None, ge=0)
    max_price: Optional[Decimal] = Field(default=None, ge=0)
    sort_by: str = Field(default="departure_time", pattern="^(departure_time|price)$")
    sort_descending: bool = False


def to_flight_dto(flight: Flight) -> dict:
    return FlightDto.model_validate(flight).model_dump(mode="json")
