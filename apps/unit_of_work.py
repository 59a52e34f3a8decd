"""
Marketplace unit of work: one typed repository per entity over a shared session.
"""

from uuid import UUID
from framework.logging.logger import get_logger
from framework.repository.unit_of_work import UnitOfWork
from apps.airports.models import Airport
from apps.airports.repository import AirportRepository
from apps.bookings.models import Booking, BookingService, Document, Passenger, Payment
from apps.bookings.repository import (
    BookingRepository,
    BookingServiceRepository,
    DocumentRepository,
    PassengerRepository,
    PaymentRepository,
)
from apps.flights.models import Flight
from apps.flights.repository import FlightRepository
from apps.identity.models import RefreshToken, User, UserAlert
from apps.identity.repository import RefreshTokenRepository, UserAlertRepository, UserRepository
from apps.operators.models import Aircraft, Company, Review
from apps.operators.repository import AircraftRepository, CompanyRepository, ReviewRepository

logger = get_logger("marketplace_uow")


class MarketplaceUnitOfWork(UnitOfWork):
    """Repositories are created lazily and cached, so each accessor returns the same instance."""

    @property
    def users(self) -> UserRepository:
        return self.get_repository(UserRepository, User)

    @property
    def companies(self) -> CompanyRepository:
        return self.get_repository(CompanyRepository, Company)

    @property
    def aircraft(self) -> AircraftRepository:
        return self.get_repository(AircraftRepository, Aircraft)

    @property
    def airports(self) -> AirportRepository:
        return self.get_repository(AirportRepository, Airport)

    @property
    def flights(self) -> FlightRepository:
        return self.get_repository(FlightRepository, Flight)

    @property
    def bookings(self) -> BookingRepository:
        return self.get_repository(BookingRepository, Booking)

    @property
    def passengers(self) -> PassengerRepository:
        return self.get_repository(PassengerRepository, Passenger)

    @property
    def payments(self) -> PaymentRepository:
        return self.get_repository(PaymentRepository, Payment)

    @property
    def documents(self) -> DocumentRepository:
        return self.get_repository(DocumentRepository, Document)

    @property
    def reviews(self) -> ReviewRepository:
        return self.get_repository(ReviewRepository, Review)

    @property
    def user_alerts(self) -> UserAlertRepository:
        return self.get_repository(UserAlertRepository, UserAlert)

    @property
    def booking_services(self) -> BookingServiceRepository:
        return self.get_repository(BookingServiceRepository, BookingService)

    @property
    def refresh_tokens(self) -> RefreshTokenRepository:
        return self.get_repository(RefreshTokenRepository, RefreshToken)

    async def soft_delete_booking(self, booking_id: UUID, cascade: bool = True) -> bool:
        """
        Soft delete a booking and, when ``cascade``, the children it owns.

        Passengers, their documents and booking services are flagged; payments are
        kept visible as financial records. Returns False if the booking is absent or
        already deleted, in which case nothing is touched.
        """
        if not await self.bookings.soft_delete(booking_id):
            return False
        if not cascade:
            return True

        passengers = await self.passengers.list_by_booking(booking_id)
        documents = 0
        if passengers:
            documents = await self.documents.soft_delete_where(
                Document.passenger_id.in_([p.id for p in passengers])
            )
        passenger_count = await self.passengers.soft_delete_where(booking_id=booking_id)
        services = await self.booking_services.soft_delete_where(booking_id=booking_id)
        logger.info(
            f"Booking {booking_id} soft deleted with {passenger_count} passengers, "
            f"{documents} documents, {services} services"
        )
        return True
