"""Flight API test cases."""
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4
from httpx import AsyncClient
from apps.flights.models import FlightStatus
from apps.operators.models import Aircraft, AircraftType, Company
from tests.factories import make_flight, persist

BASE = "/api/v1/flights"


@pytest.fixture
async def flight_board(uow_factory, sample_airports, sample_company, sample_aircraft):
    """Three bookable flights plus a departed one and a cancelled one."""
    lhr, cdg, nce = sample_airports
    flights = await persist(
        uow_factory,
        make_flight(sample_company, sample_aircraft, lhr, cdg, hours_ahead=24, price="9000", flight_number="EL1"),
        make_flight(sample_company, sample_aircraft, lhr, nce, hours_ahead=72, price="15000", flight_number="EL2"),
        make_flight(sample_company, sample_aircraft, cdg, nce, hours_ahead=48, price="7000",
                    flight_number="EL3", available_seats=2),
        make_flight(sample_company, sample_aircraft, lhr, cdg, hours_ahead=-24, flight_number="EL4"),
        make_flight(sample_company, sample_aircraft, lhr, cdg, hours_ahead=36, flight_number="EL5",
                    status=FlightStatus.CANCELLED),
    )
    return list(flights)


def flight_numbers(response) -> list:
    return [f["flight_number"] for f in response.json()["data"]["items"]]


class TestFlightSearch:
    """Test flight search."""

    @pytest.mark.asyncio
    async def test_only_future_available_flights(self, client: AsyncClient, flight_board):
        """Test departed and cancelled flights are never listed; default sort is departure time."""
        response = await client.get(f"{BASE}/search")

        assert response.status_code == 200
        assert flight_numbers(response) == ["EL1", "EL3", "EL2"]
        assert response.json()["data"]["total_count"] == 3

    @pytest.mark.asyncio
    async def test_filter_by_route(self, client: AsyncClient, flight_board):
        response = await client.get(f"{BASE}/search", params={"departure_airport": "lhr"})
        assert flight_numbers(response) == ["EL1", "EL2"]

        response = await client.get(
            f"{BASE}/search", params={"departure_airport": "LHR", "arrival_airport": "NCE"}
        )
        assert flight_numbers(response) == ["EL2"]

    @pytest.mark.asyncio
    async def test_unknown_airport_gives_empty_page(self, client: AsyncClient, flight_board):
        response = await client.get(f"{BASE}/search", params={"arrival_airport": "XXX"})
        assert response.status_code == 200
        page = response.json()["data"]
        assert page["items"] == []
        assert page["total_count"] == 0

    @pytest.mark.asyncio
    async def test_filter_by_seats_and_price(self, client: AsyncClient, flight_board):
        response = await client.get(f"{BASE}/search", params={"passenger_count": 3})
        assert flight_numbers(response) == ["EL1", "EL2"]

        response = await client.get(f"{BASE}/search", params={"min_price": "8000", "max_price": "10000"})
        assert flight_numbers(response) == ["EL1"]

    @pytest.mark.asyncio
    async def test_filter_by_departure_window(self, client: AsyncClient, flight_board):
        now = datetime.now(timezone.utc)
        params = {
            "departure_from": (now + timedelta(hours=30)).isoformat(),
            "departure_to": (now + timedelta(hours=60)).isoformat(),
        }
        response = await client.get(f"{BASE}/search", params=params)
        assert flight_numbers(response) == ["EL3"]

    @pytest.mark.asyncio
    async def test_sort_by_price_descending(self, client: AsyncClient, flight_board):
        response = await client.get(f"{BASE}/search", params={"sort_by": "price", "sort_descending": True})
        assert flight_numbers(response) == ["EL2", "EL1", "EL3"]

    @pytest.mark.asyncio
    async def test_paging(self, client: AsyncClient, flight_board):
        response = await client.get(f"{BASE}/search", params={"page": 2, "page_size": 2})
        page = response.json()["data"]
        assert [f["flight_number"] for f in page["items"]] == ["EL2"]
        assert page["total_pages"] == 2
        assert page["has_previous_page"] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [
        {"departure_airport": "ZZZ", "page": 0},
        {"arrival_airport": "ZZZ", "page_size": 0},
        {"page": 0},
    ])
    async def test_invalid_paging(self, client: AsyncClient, flight_board, params):
        """Test out-of-range paging is a 400 even when an airport code is unknown."""
        response = await client.get(f"{BASE}/search", params=params)

        assert response.status_code == 400
        assert "page" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_invalid_sort(self, client: AsyncClient):
        response = await client.get(f"{BASE}/search", params={"sort_by": "altitude"})
        assert response.status_code == 422


class TestFlightCrud:
    """Test single-flight endpoints."""

    def payload(self, airports, company, aircraft, **overrides) -> dict:
        departure = datetime.now(timezone.utc) + timedelta(days=3)
        body = {
            "flight_number": "EL900",
            "departure_airport_id": str(airports[0].id),
            "arrival_airport_id": str(airports[2].id),
            "aircraft_id": str(aircraft.id),
            "company_id": str(company.id),
            "departure_time": departure.isoformat(),
            "arrival_time": (departure + timedelta(hours=2, minutes=15)).isoformat(),
            "base_price": "18500.00",
            "available_seats": 6,
        }
        body.update(overrides)
        return body

    @pytest.mark.asyncio
    async def test_create_flight(self, client: AsyncClient, sample_airports, sample_company, sample_aircraft):
        """Test creation copies base price and seats into the derived fields."""
        response = await client.post(
            f"{BASE}/", json=self.payload(sample_airports, sample_company, sample_aircraft)
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert Decimal(data["current_price"]) == Decimal("18500")
        assert data["total_seats"] == 6
        assert data["status"] == "AVAILABLE"
        assert data["duration_minutes"] == 135

        response = await client.get(f"{BASE}/{data['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["flight_number"] == "EL900"

    @pytest.mark.asyncio
    async def test_create_with_foreign_aircraft(
        self, client: AsyncClient, uow_factory, sample_airports, sample_company, sample_aircraft
    ):
        """Test an aircraft owned by another company is refused."""
        (other,) = await persist(uow_factory, Company(name="Other Air"))
        response = await client.post(
            f"{BASE}/", json=self.payload(sample_airports, other, sample_aircraft)
        )
        assert response.status_code == 400
        assert "Aircraft" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_create_over_capacity(self, client: AsyncClient, sample_airports, sample_company, sample_aircraft):
        response = await client.post(
            f"{BASE}/", json=self.payload(sample_airports, sample_company, sample_aircraft, available_seats=12)
        )
        assert response.status_code == 400
        assert "capacity" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_create_with_unknown_airport(
        self, client: AsyncClient, sample_airports, sample_company, sample_aircraft
    ):
        response = await client.post(
            f"{BASE}/",
            json=self.payload(sample_airports, sample_company, sample_aircraft, arrival_airport_id=str(uuid4())),
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_arrival_before_departure(
        self, client: AsyncClient, sample_airports, sample_company, sample_aircraft
    ):
        departure = datetime.now(timezone.utc) + timedelta(days=3)
        response = await client.post(
            f"{BASE}/",
            json=self.payload(
                sample_airports, sample_company, sample_aircraft,
                departure_time=departure.isoformat(),
                arrival_time=(departure - timedelta(hours=1)).isoformat(),
            ),
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_missing(self, client: AsyncClient):
        response = await client.get(f"{BASE}/{uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_flight(self, client: AsyncClient, sample_flight):
        """Test a deleted flight disappears from reads and search."""
        response = await client.delete(f"{BASE}/{sample_flight.id}")
        assert response.status_code == 200

        assert (await client.get(f"{BASE}/{sample_flight.id}")).status_code == 404
        response = await client.get(f"{BASE}/search")
        assert response.json()["data"]["total_count"] == 0
        assert (await client.delete(f"{BASE}/{sample_flight.id}")).status_code == 404


    @pytest.mark.asyncio
    async def test_update_flight(self, client: AsyncClient, sample_flight):
        """Test a partial update; a new base price resets the current price."""
        response = await client.put(
            f"{BASE}/{sample_flight.id}",
            json={"base_price": "9900.00", "available_seats": 4, "status": "RESERVED", "description": "Late leg"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert Decimal(data["base_price"]) == Decimal("9900")
        assert Decimal(data["current_price"]) == Decimal("9900")
        assert data["available_seats"] == 4
        assert data["status"] == "RESERVED"
        assert data["description"] == "Late leg"
        assert data["flight_number"] == sample_flight.flight_number

        response = await client.get(f"{BASE}/{sample_flight.id}")
        assert response.json()["data"]["status"] == "RESERVED"

    @pytest.mark.asyncio
    async def test_update_schedule(self, client: AsyncClient, sample_flight):
        """Test arrival must stay after departure once merged with the stored times."""
        departure = sample_flight.departure_time.replace(tzinfo=timezone.utc)
        response = await client.put(
            f"{BASE}/{sample_flight.id}",
            json={"departure_time": (departure + timedelta(hours=3)).isoformat()},
        )
        assert response.status_code == 400

        response = await client.put(
            f"{BASE}/{sample_flight.id}",
            json={"arrival_time": (departure + timedelta(hours=3)).isoformat()},
        )
        assert response.status_code == 200
        assert response.json()["data"]["duration_minutes"] == 180

    @pytest.mark.asyncio
    async def test_update_rejected(self, client: AsyncClient, sample_flight):
        response = await client.put(f"{BASE}/{sample_flight.id}", json={"available_seats": 20})
        assert response.status_code == 400
        assert "capacity" in response.json()["message"]

        response = await client.put(f"{BASE}/{sample_flight.id}", json={"minimum_price": "50000"})
        assert response.status_code == 400

        response = await client.put(f"{BASE}/{sample_flight.id}", json={"base_price": None})
        assert response.status_code == 422

        response = await client.put(f"{BASE}/{uuid4()}", json={"description": "x"})
        assert response.status_code == 404

class TestAircraftOwnership:
    """Test the aircraft-for-company lookup used by flight creation."""

    @pytest.mark.asyncio
    async def test_get_for_company(self, uow, sample_company, sample_aircraft):
        assert (await uow.aircraft.get_for_company(sample_aircraft.id, sample_company.id)) is not None
        assert await uow.aircraft.get_for_company(sample_aircraft.id, uuid4()) is None

    @pytest.mark.asyncio
    async def test_registration_lookup(self, uow, uow_factory, sample_company):
        await persist(uow_factory, Aircraft(
            model="Phenom 300", manufacturer="Embraer", registration="OE-GPH", capacity=7,
            type=AircraftType.LIGHT_JET, year_manufactured=2019, company_id=sample_company.id,
        ))
        aircraft = await uow.aircraft.get_by_registration("oe-gph")
        assert aircraft.amenities == []
