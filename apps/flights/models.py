import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import Field
from framework.database.entity import BaseEntity


class FlightStatus(str, Enum):
    """Flight status enum."""
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Flight(BaseEntity, table=True):
    """An empty leg offered by an operator."""
    __tablename__ = "flights"

    flight_number: str = Field(max_length=20, index=True)
    departure_time: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    arrival_time: datetime = Field(sa_type=DateTime(timezone=True))
    base_price: Decimal = Field(max_digits=18, decimal_places=2)
    current_price: Decimal = Field(max_digits=18, decimal_places=2, index=True)
    minimum_price: Optional[Decimal] = Field(default=None, max_digits=18, decimal_places=2)
    available_seats: int
    total_seats: int
    status: FlightStatus = Field(default=FlightStatus.AVAILABLE, index=True)
    description: Optional[str] = Field(default=None, max_length=2000)
    special_instructions: Optional[str] = Field(default=None, max_length=1000)
    allows_automatic_pricing: bool = Field(default=True)

    departure_airport_id: uuid.UUID = Field(foreign_key="airports.id", index=True)
    arrival_airport_id: uuid.UUID = Field(foreign_key="airports.id", index=True)
    aircraft_id: uuid.UUID = Field(foreign_key="aircraft.id", index=True)
    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True)

    @property
    def duration(self) -> timedelta:
        return self.arrival_time - self.departure_time

    @property
    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)
