import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import Field
from framework.database.entity import BaseEntity, as_utc, utc_now


class UserRole(str, Enum):
    CUSTOMER = "CUSTOMER"
    COMPANY = "COMPANY"
    ADMIN = "ADMIN"


class User(BaseEntity, table=True):
    __tablename__ = "users"

    email: str = Field(max_length=255, unique=True, index=True)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    phone_number: Optional[str] = Field(default=None, max_length=32)
    date_of_birth: Optional[date] = None
    role: UserRole = Field(default=UserRole.CUSTOMER)
    is_active: bool = Field(default=True)
    is_email_verified: bool = Field(default=False)
    password_hash: Optional[str] = Field(default=None, max_length=255)

    # Operator staff belong to a company; customers do not
    company_id: Optional[uuid.UUID] = Field(default=None, foreign_key="companies.id", index=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class RefreshToken(BaseEntity, table=True):
    __tablename__ = "refresh_tokens"

    token: str = Field(max_length=512, unique=True, index=True)
    expires_at: datetime = Field(sa_type=DateTime(timezone=True))
    is_revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    revoked_by_ip: Optional[str] = Field(default=None, max_length=64)
    replaced_by_token: Optional[str] = Field(default=None, max_length=512)
    created_by_ip: str = Field(default="", max_length=64)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    @property
    def is_expired(self) -> bool:
        return utc_now() >= as_utc(self.expires_at)

    @property
    def is_active(self) -> bool:
        return not self.is_revoked and not self.is_expired


class UserAlert(BaseEntity, table=True):
    """Saved search a user wants to be notified about."""
    __tablename__ = "user_alerts"

    name: str = Field(max_length=100)
    departure_airport_code: Optional[str] = Field(default=None, max_length=3)
    arrival_airport_code: Optional[str] = Field(default=None, max_length=3)
    departure_date_from: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    departure_date_to: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    min_passengers: Optional[int] = None
    max_price: Optional[Decimal] = Field(default=None, max_digits=18, decimal_places=2)
    is_active: bool = Field(default=True)
    email_notifications: bool = Field(default=True)
    push_notifications: bool = Field(default=True)
    sms_notifications: bool = Field(default=False)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
