import uuid
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from sqlalchemy import CheckConstraint
from sqlmodel import Field, Column, JSON
from framework.database.entity import BaseEntity


class AircraftType(str, Enum):
    TURBOPROP = "TURBOPROP"
    VERY_LIGHT_JET = "VERY_LIGHT_JET"
    LIGHT_JET = "LIGHT_JET"
    MID_JET = "MID_JET"
    HEAVY_JET = "HEAVY_JET"
    HELICOPTER = "HELICOPTER"


class Company(BaseEntity, table=True):
    """Charter operator selling empty legs."""
    __tablename__ = "companies"

    name: str = Field(max_length=200, index=True)
    description: str = Field(default="", max_length=2000)
    license: str = Field(default="", max_length=100)
    logo_url: Optional[str] = Field(default=None, max_length=500)
    contact_email: str = Field(default="", max_length=255)
    contact_phone: str = Field(default="", max_length=32)
    address: str = Field(default="", max_length=500)
    city: str = Field(default="", max_length=100)
    country: str = Field(default="", max_length=100)
    website: Optional[str] = Field(default=None, max_length=500)
    is_verified: bool = Field(default=False)
    is_active: bool = Field(default=True)
    average_rating: Decimal = Field(default=Decimal("0"), max_digits=3, decimal_places=2)
    total_reviews: int = Field(default=0)


class Aircraft(BaseEntity, table=True):
    __tablename__ = "aircraft"

    model: str = Field(max_length=100)
    manufacturer: str = Field(max_length=100)
    registration: str = Field(max_length=20, unique=True, index=True)
    capacity: int
    type: AircraftType
    year_manufactured: int
    description: str = Field(default="", max_length=2000)
    cruise_speed: Optional[Decimal] = Field(default=None, max_digits=8, decimal_places=2)
    range: Optional[Decimal] = Field(default=None, max_digits=8, decimal_places=2)
    is_active: bool = Field(default=True)
    amenities: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    photo_urls: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    company_id: uuid.UUID = Field(foreign_key="companies.id", index=True)


class Review(BaseEntity, table=True):
    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),)

    rating: int = Field(ge=1, le=5)  # stars
    title: str = Field(max_length=200)
    comment: str = Field(default="", max_length=2000)
    is_verified: bool = Field(default=False)
    is_visible: bool = Field(default=True)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    flight_id: Optional[uuid.UUID] = Field(default=None, foreign_key="flights.id", index=True)
    company_id: Optional[uuid.UUID] = Field(default=None, foreign_key="companies.id", index=True)
