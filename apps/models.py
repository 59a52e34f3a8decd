"""
Model registration for migrations: import all models that should be migrated by Alembic here.
SQLModel.metadata only knows the tables whose modules were imported.
"""
from apps.identity.models import User, RefreshToken, UserAlert
from apps.operators.models import Company, Aircraft, Review
from apps.airports.models import Airport
from apps.flights.models import Flight
from apps.bookings.models import Booking, Passenger, Payment, Document, BookingService

__all__ = [
    "User",
    "RefreshToken",
    "UserAlert",
    "Company",
    "Aircraft",
    "Review",
    "Airport",
    "Flight",
    "Booking",
    "Passenger",
    "Payment",
    "Document",
    "BookingService",
]
