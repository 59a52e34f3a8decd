"""Booking module repository implementations."""

from typing import List, Optional
from uuid import UUID
from sqlalchemy import inspect
from framework.repository.base import BaseRepository
from .models import Booking, BookingService, BookingStatus, Document, Passenger, Payment


class BookingRepository(BaseRepository[Booking]):
    """Booking repository."""

    def __init__(self, session):
        super().__init__(session, Booking)

    async def get_by_reference(self, reference: str) -> Optional[Booking]:
        return await self.first_or_default(booking_reference=reference.strip().upper())

    async def list_by_user(self, user_id: UUID, status: Optional[BookingStatus] = None) -> List[Booking]:
        """List bookings of a user, newest first (optional status filter)."""
        filters = {"user_id": user_id}
        if status:
            filters["status"] = status
        statement = self._query(**filters).order_by(Booking.booking_date.desc())
        result = await self.session.exec(statement)
        return list(result.all())

    async def list_by_flight(self, flight_id: UUID) -> List[Booking]:
        return await self.find(flight_id=flight_id)

    async def remove(self, booking: Booking) -> None:
        """Hard delete; owned collections are reloaded first so the ORM cascade sees every child."""
        if inspect(booking).persistent:
            await self.session.refresh(booking, ["passengers", "additional_services"])
        await super().remove(booking)


class PassengerRepository(BaseRepository[Passenger]):
    """Passenger repository."""

    def __init__(self, session):
        super().__init__(session, Passenger)

    async def list_by_booking(self, booking_id: UUID) -> List[Passenger]:
        return await self.find(booking_id=booking_id)


class PaymentRepository(BaseRepository[Payment]):
    """Payment repository."""

    def __init__(self, session):
        super().__init__(session, Payment)

    async def list_by_booking(self, booking_id: UUID) -> List[Payment]:
        return await self.find(booking_id=booking_id)

    async def get_by_payment_intent(self, intent_id: str) -> Optional[Payment]:
        return await self.first_or_default(stripe_payment_intent_id=intent_id)


class DocumentRepository(BaseRepository[Document]):
    """Passenger document repository."""

    def __init__(self, session):
        super().__init__(session, Document)

    async def list_by_passenger(self, passenger_id: UUID) -> List[Document]:
        return await self.find(passenger_id=passenger_id)


class BookingServiceRepository(BaseRepository[BookingService]):
    """Booking add-on service repository."""

    def __init__(self, session):
        super().__init__(session, BookingService)

    async def list_by_booking(self, booking_id: UUID) -> List[BookingService]:
        return await self.find(booking_id=booking_id)
