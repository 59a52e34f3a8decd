from decimal import Decimal
from sqlmodel import Field
from framework.database.entity import BaseEntity


class Airport(BaseEntity, table=True):
    __tablename__ = "airports"

    iata_code: str = Field(max_length=3, unique=True, index=True)
    icao_code: str = Field(default="", max_length=4, index=True)
    name: str = Field(max_length=200)
    city: str = Field(max_length=100, index=True)
    country: str = Field(max_length=100, index=True)
    latitude: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=7)
    longitude: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=7)
    time_zone: str = Field(default="UTC", max_length=64)
    is_active: bool = Field(default=True)
