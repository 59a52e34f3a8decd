import secrets
import string
import uuid
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from sqlalchemy import DateTime
from sqlmodel import Field, Relationship
from framework.database.entity import BaseEntity, utc_now

# Owned children are physically removed with their parent on hard delete only;
# soft delete never cascades implicitly (see MarketplaceUnitOfWork.soft_delete_booking).
OWNED_CHILDREN = {"cascade": "all, delete-orphan", "lazy": "selectin"}

REFERENCE_ALPHABET = string.ascii_uppercase + string.digits


def new_booking_reference() -> str:
    return "EL" + "".join(secrets.choice(REFERENCE_ALPHABET) for _ in range(8))


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PAYMENT_PENDING = "PAYMENT_PENDING"
    PAYMENT_CONFIRMED = "PAYMENT_CONFIRMED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    COMPLETED = "COMPLETED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "CREDIT_CARD"
    PAYPAL = "PAYPAL"
    APPLE_PAY = "APPLE_PAY"
    GOOGLE_PAY = "GOOGLE_PAY"
    BANK_TRANSFER = "BANK_TRANSFER"
    STRIPE = "STRIPE"


class Document(BaseEntity, table=True):
    """Travel document uploaded for a passenger (passport, id card, visa...)."""
    __tablename__ = "documents"

    type: str = Field(max_length=50)
    file_name: str = Field(max_length=255)
    file_url: str = Field(max_length=1000)
    content_type: str = Field(default="", max_length=100)
    file_size: int = Field(default=0)
    is_verified: bool = Field(default=False)
    verified_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    verified_by: Optional[str] = Field(default=None, max_length=255)

    passenger_id: uuid.UUID = Field(foreign_key="passengers.id", index=True)


class Passenger(BaseEntity, table=True):
    __tablename__ = "passengers"

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    date_of_birth: date
    passport_number: Optional[str] = Field(default=None, max_length=50)
    nationality: Optional[str] = Field(default=None, max_length=100)
    special_requests: Optional[str] = Field(default=None, max_length=1000)

    booking_id: uuid.UUID = Field(foreign_key="bookings.id", index=True)

    documents: List[Document] = Relationship(sa_relationship_kwargs=OWNED_CHILDREN)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def age(self) -> int:
        today = utc_now().date()
        had_birthday = (today.month, today.day) >= (self.date_of_birth.month, self.date_of_birth.day)
        return today.year - self.date_of_birth.year - (0 if had_birthday else 1)


class BookingService(BaseEntity, table=True):
    """Extra service sold with a booking (transfer, catering, wifi...)."""
    __tablename__ = "booking_services"

    service_type: str = Field(max_length=50)
    name: str = Field(max_length=100)
    description: str = Field(default="", max_length=500)
    price: Decimal = Field(max_digits=18, decimal_places=2)
    quantity: int = Field(default=1)

    booking_id: uuid.UUID = Field(foreign_key="bookings.id", index=True)

    @property
    def total_price(self) -> Decimal:
        return self.price * self.quantity


class Payment(BaseEntity, table=True):
    __tablename__ = "payments"

    stripe_payment_intent_id: str = Field(default="", max_length=255, index=True)
    amount: Decimal = Field(max_digits=18, decimal_places=2)
    currency: str = Field(default="EUR", max_length=3)
    status: PaymentStatus = Field(default=PaymentStatus.PENDING)
    payment_method: PaymentMethod = Field(default=PaymentMethod.STRIPE)
    processed_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    failure_reason: Optional[str] = Field(default=None, max_length=500)
    refund_reason: Optional[str] = Field(default=None, max_length=500)
    refund_amount: Optional[Decimal] = Field(default=None, max_digits=18, decimal_places=2)
    refunded_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    booking_id: uuid.UUID = Field(foreign_key="bookings.id", index=True)

    @property
    def is_successful(self) -> bool:
        return self.status == PaymentStatus.SUCCEEDED

    @property
    def is_refunded(self) -> bool:
        return self.refund_amount is not None and self.refund_amount > 0


class Booking(BaseEntity, table=True):
    __tablename__ = "bookings"

    booking_reference: str = Field(default_factory=new_booking_reference, max_length=10, unique=True, index=True)
    status: BookingStatus = Field(default=BookingStatus.PENDING, index=True)
    passenger_count: int
    total_price: Decimal = Field(max_digits=18, decimal_places=2)
    service_fees: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2)
    booking_date: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    special_requests: Optional[str] = Field(default=None, max_length=1000)
    cancellation_reason: Optional[str] = Field(default=None, max_length=500)
    cancelled_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    flight_id: uuid.UUID = Field(foreign_key="flights.id", index=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    passengers: List[Passenger] = Relationship(sa_relationship_kwargs=OWNED_CHILDREN)
    additional_services: List[BookingService] = Relationship(sa_relationship_kwargs=OWNED_CHILDREN)

    @property
    def total_amount(self) -> Decimal:
        services = sum((s.total_price for s in self.additional_services), Decimal("0"))
        return self.total_price + self.service_fees + services

    def generate_booking_reference(self) -> str:
        self.booking_reference = new_booking_reference()
        return self.booking_reference
