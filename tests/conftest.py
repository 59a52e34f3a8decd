"""Test config and shared fixtures."""
import pytest
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator, List
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import apps.models  # noqa: F401  register every table on SQLModel.metadata
from main import app
from framework.database.sql_driver import build_session_factory
from apps.unit_of_work import MarketplaceUnitOfWork
from apps.bookings.models import Booking, BookingService, Document, Passenger, Payment, PaymentStatus
from apps.airports.models import Airport
from apps.flights.models import Flight
from apps.identity.models import User
from apps.operators.models import Aircraft, AircraftType, Company
from tests.factories import make_airport, make_flight, persist


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def async_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Raw session, for assertions that bypass the repositories."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def uow_factory(session_factory):
    """Build independent units of work, each over its own session."""
    def _make() -> MarketplaceUnitOfWork:
        return MarketplaceUnitOfWork.from_session_factory(session_factory)
    return _make


@pytest.fixture
async def uow(uow_factory) -> AsyncGenerator[MarketplaceUnitOfWork, None]:
    uow = uow_factory()
    yield uow
    await uow.dispose()


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    from apps.dependencies import get_db

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def sample_airports(uow_factory) -> List[Airport]:
    """LHR, CDG and NCE."""
    airports = await persist(
        uow_factory,
        make_airport("LHR", "Heathrow", "London", "United Kingdom", icao_code="EGLL"),
        make_airport("CDG", "Charles de Gaulle", "Paris", "France", icao_code="LFPG"),
        make_airport("NCE", "Nice Cote d'Azur", "Nice", "France", icao_code="LFMN"),
    )
    return list(airports)


@pytest.fixture
async def sample_company(uow_factory) -> Company:
    (company,) = await persist(uow_factory, Company(name="Skyline Charter", country="France"))
    return company


@pytest.fixture
async def sample_aircraft(uow_factory, sample_company: Company) -> Aircraft:
    (aircraft,) = await persist(
        uow_factory,
        Aircraft(
            model="Citation XLS",
            manufacturer="Cessna",
            registration="F-HSKY",
            capacity=8,
            type=AircraftType.MID_JET,
            year_manufactured=2015,
            amenities=["wifi", "catering"],
            company_id=sample_company.id,
        ),
    )
    return aircraft


@pytest.fixture
async def sample_flight(uow_factory, sample_airports, sample_company, sample_aircraft) -> Flight:
    lhr, cdg, _ = sample_airports
    (flight,) = await persist(uow_factory, make_flight(sample_company, sample_aircraft, lhr, cdg))
    return flight


@pytest.fixture
async def sample_user(uow_factory) -> User:
    (user,) = await persist(
        uow_factory,
        User(email="jane@example.com", first_name="Jane", last_name="Doe"),
    )
    return user


@pytest.fixture
async def sample_booking(uow_factory, sample_flight: Flight, sample_user: User) -> Booking:
    """Booking with two passengers (one with a passport), one extra service and one payment."""
    booking = Booking(
        passenger_count=2,
        total_price=Decimal("24000"),
        flight_id=sample_flight.id,
        user_id=sample_user.id,
        passengers=[
            Passenger(
                first_name="Jane",
                last_name="Doe",
                date_of_birth=date(1990, 5, 17),
                documents=[Document(type="PASSPORT", file_name="jane.pdf", file_url="https://files/jane.pdf")],
            ),
            Passenger(first_name="John", last_name="Doe", date_of_birth=date(1988, 1, 2), documents=[]),
        ],
        additional_services=[
            BookingService(service_type="CATERING", name="Champagne", price=Decimal("150"), quantity=2),
        ],
    )
    await persist(uow_factory, booking)
    await persist(
        uow_factory,
        Payment(amount=Decimal("24300"), status=PaymentStatus.SUCCEEDED, booking_id=booking.id),
    )
    return booking
