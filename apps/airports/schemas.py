"""Airport DTOs and entity mapping."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, field_validator
from .models import Airport


class AirportDto(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    iata_code: str
    icao_code: str
    name: str
    city: str
    country: str
    latitude: Decimal
    longitude: Decimal
    time_zone: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CreateAirportDto(BaseModel):
    iata_code: str = Field(min_length=3, max_length=3)
    icao_code: str = Field(default="", max_length=4)
    name: str = Field(min_length=1, max_length=200)
    city: str = Field(min_length=1, max_length=100)
    country: str = Field(min_length=1, max_length=100)
    latitude: Decimal = Field(default=Decimal("0"), ge=-90, le=90)
    longitude: Decimal = Field(default=Decimal("0"), ge=-180, le=180)
    time_zone: str = Field(default="UTC", max_length=64)
    is_active: bool = True

    @field_validator("iata_code", "icao_code")
    @classmethod
    def upper_code(cls, value: str) -> str:
        return value.strip().upper()


class UpdateAirportDto(BaseModel):
    """Partial update; only fields present in the payload are applied."""
    icao_code: Optional[str] = Field(default=None, max_length=4)
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    country: Optional[str] = Field(default=None, min_length=1, max_length=100)
    latitude: Optional[Decimal] = Field(default=None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(default=None, ge=-180, le=180)
    time_zone: Optional[str] = Field(default=None, max_length=64)
    is_active: Optional[bool] = None

    @field_validator("icao_code", "name", "city", "country", "latitude", "longitude", "time_zone", "is_active")
    @classmethod
    def not_null(cls, value):
        # fields may be omitted, but the columns behind them are NOT NULL
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    @field_validator("icao_code")
    @classmethod
    def upper_code(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().upper() if value is not None else value


def to_airport_dto(airport: Airport) -> dict:
    return AirportDto.model_validate(airport).model_dump(mode="json")
