"""Airport API test cases."""
import pytest
from decimal import Decimal
from uuid import uuid4
from httpx import AsyncClient
from tests.factories import make_airport, persist

BASE = "/api/v1/airports"


class TestAirportList:
    """Test paged listing."""

    @pytest.mark.asyncio
    async def test_list_paged(self, client: AsyncClient, sample_airports):
        """Test the paged envelope over three airports, two per page."""
        response = await client.get(f"{BASE}/", params={"page": 1, "page_size": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["code"] == 200
        page = data["data"]
        assert [a["name"] for a in page["items"]] == ["Charles de Gaulle", "Heathrow"]
        assert page["total_count"] == 3
        assert page["total_pages"] == 2
        assert page["has_next_page"] is True
        assert page["has_previous_page"] is False

        response = await client.get(f"{BASE}/", params={"page": 2, "page_size": 2})
        page = response.json()["data"]
        assert [a["iata_code"] for a in page["items"]] == ["NCE"]
        assert page["has_next_page"] is False
        assert page["has_previous_page"] is True

    @pytest.mark.asyncio
    async def test_list_filters(self, client: AsyncClient, sample_airports):
        response = await client.get(f"{BASE}/", params={"country": "france"})
        assert {a["iata_code"] for a in response.json()["data"]["items"]} == {"CDG", "NCE"}

        response = await client.get(f"{BASE}/", params={"search": "heath"})
        assert [a["iata_code"] for a in response.json()["data"]["items"]] == ["LHR"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"page_size": 0}, {"page_size": 1000}])
    async def test_invalid_paging(self, client: AsyncClient, params):
        """Test out-of-range paging is a 400 with the error envelope."""
        response = await client.get(f"{BASE}/", params=params)

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == 400
        assert "page" in data["message"]


class TestAirportLookup:
    """Test search and single-airport reads."""

    @pytest.mark.asyncio
    async def test_search(self, client: AsyncClient, sample_airports):
        response = await client.get(f"{BASE}/search", params={"query": "paris"})
        assert response.status_code == 200
        assert [a["iata_code"] for a in response.json()["data"]] == ["CDG"]

        response = await client.get(f"{BASE}/search", params={"query": "lfmn"})
        assert [a["iata_code"] for a in response.json()["data"]] == ["NCE"]

    @pytest.mark.asyncio
    async def test_search_requires_query(self, client: AsyncClient):
        response = await client.get(f"{BASE}/search", params={"query": "  "})
        assert response.status_code == 400
        assert response.json()["code"] == 400

    @pytest.mark.asyncio
    async def test_search_skips_inactive(self, client: AsyncClient, uow_factory):
        await persist(uow_factory, make_airport("OLD", "Old Field", "Paris", "France", is_active=False))
        response = await client.get(f"{BASE}/search", params={"query": "paris"})
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_countries(self, client: AsyncClient, sample_airports):
        response = await client.get(f"{BASE}/countries")
        assert response.json()["data"] == ["France", "United Kingdom"]

    @pytest.mark.asyncio
    async def test_get_by_iata(self, client: AsyncClient, sample_airports):
        response = await client.get(f"{BASE}/iata/cdg")
        assert response.status_code == 200
        assert response.json()["data"]["city"] == "Paris"

        response = await client.get(f"{BASE}/iata/JFK")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_by_id(self, client: AsyncClient, sample_airports):
        lhr = sample_airports[0]
        response = await client.get(f"{BASE}/{lhr.id}")
        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(lhr.id)

        response = await client.get(f"{BASE}/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["code"] == 404


class TestAirportWrites:
    """Test create, update and delete."""

    @pytest.mark.asyncio
    async def test_create(self, client: AsyncClient):
        payload = {
            "iata_code": "gva",
            "icao_code": "lsgg",
            "name": "Geneva",
            "city": "Geneva",
            "country": "Switzerland",
            "latitude": "46.2380",
            "longitude": "6.1089",
            "time_zone": "Europe/Zurich",
        }
        response = await client.post(f"{BASE}/", json=payload)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["iata_code"] == "GVA"
        assert data["icao_code"] == "LSGG"

        response = await client.get(f"{BASE}/iata/GVA")
        assert response.json()["data"]["id"] == data["id"]

    @pytest.mark.asyncio
    async def test_create_duplicate_iata(self, client: AsyncClient, sample_airports):
        payload = {"iata_code": "LHR", "name": "Another", "city": "London", "country": "United Kingdom"}
        response = await client.post(f"{BASE}/", json=payload)
        assert response.status_code == 400
        assert "LHR" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_create_validation_error(self, client: AsyncClient):
        payload = {"iata_code": "TOOLONG", "name": "X", "city": "Y", "country": "Z"}
        response = await client.post(f"{BASE}/", json=payload)
        assert response.status_code == 422
        assert response.json()["code"] == 422

    @pytest.mark.asyncio
    async def test_update(self, client: AsyncClient, sample_airports):
        """Test a partial update changes only the given fields."""
        nce = sample_airports[2]
        response = await client.put(f"{BASE}/{nce.id}", json={"name": "Nice Airport", "is_active": False})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Nice Airport"
        assert data["is_active"] is False
        assert data["city"] == "Nice"

    @pytest.mark.asyncio
    async def test_update_missing(self, client: AsyncClient):
        response = await client.put(f"{BASE}/{uuid4()}", json={"name": "Nowhere"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, sample_airports):
        """Test a deleted airport is gone from reads and cannot be deleted twice."""
        cdg = sample_airports[1]

        response = await client.delete(f"{BASE}/{cdg.id}")
        assert response.status_code == 200

        assert (await client.get(f"{BASE}/{cdg.id}")).status_code == 404
        assert (await client.get(f"{BASE}/iata/CDG")).status_code == 404
        response = await client.get(f"{BASE}/")
        assert response.json()["data"]["total_count"] == 2

        assert (await client.delete(f"{BASE}/{cdg.id}")).status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"name": None}, {"is_active": None}, {"latitude": None}])
    async def test_update_rejects_null(self, client: AsyncClient, sample_airports, payload):
        """Test explicit nulls for required columns are a validation error."""
        nce = sample_airports[2]
        response = await client.put(f"{BASE}/{nce.id}", json=payload)

        assert response.status_code == 422
        assert response.json()["code"] == 422
        assert (await client.get(f"{BASE}/{nce.id}")).json()["data"]["name"] == "Nice Cote d'Azur"

    @pytest.mark.asyncio
    async def test_recreate_deleted_iata(self, client: AsyncClient, sample_airports):
        """Test a soft-deleted airport still holds its IATA code."""
        lhr = sample_airports[0]
        assert (await client.delete(f"{BASE}/{lhr.id}")).status_code == 200

        payload = {"iata_code": "LHR", "name": "Heathrow", "city": "London", "country": "United Kingdom"}
        response = await client.post(f"{BASE}/", json=payload)

        assert response.status_code == 400
        assert "LHR" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_deactivate(self, client: AsyncClient, sample_airports):
        """Test a deactivated airport stays readable but leaves active listings."""
        cdg = sample_airports[1]
        response = await client.patch(f"{BASE}/{cdg.id}/deactivate")

        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False
        assert (await client.get(f"{BASE}/{cdg.id}")).status_code == 200
        response = await client.get(f"{BASE}/search", params={"query": "paris"})
        assert response.json()["data"] == []

        assert (await client.patch(f"{BASE}/{uuid4()}/deactivate")).status_code == 404


class TestAirportGeography:
    """Test city listing and proximity search."""

    @pytest.fixture
    async def london_airports(self, uow_factory):
        return await persist(
            uow_factory,
            make_airport("LHR", "Heathrow", "London", "United Kingdom",
                         latitude=Decimal("51.4700"), longitude=Decimal("-0.4543")),
            make_airport("LGW", "Gatwick", "London", "United Kingdom",
                         latitude=Decimal("51.1537"), longitude=Decimal("-0.1821")),
            make_airport("CDG", "Charles de Gaulle", "Paris", "France",
                         latitude=Decimal("49.0097"), longitude=Decimal("2.5479")),
            make_airport("BQH", "Biggin Hill", "London", "United Kingdom", is_active=False,
                         latitude=Decimal("51.3308"), longitude=Decimal("0.0325")),
        )

    @pytest.mark.asyncio
    async def test_cities_in_country(self, client: AsyncClient, uow_factory, sample_airports):
        """Test cities are distinct, sorted and limited to active airports."""
        await persist(
            uow_factory,
            make_airport("LBG", "Le Bourget", "Paris", "France"),
            make_airport("LYS", "Saint-Exupery", "Lyon", "France", is_active=False),
        )
        response = await client.get(f"{BASE}/countries/france/cities")

        assert response.status_code == 200
        assert response.json()["data"] == ["Nice", "Paris"]

        response = await client.get(f"{BASE}/countries/Atlantis/cities")
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_nearby(self, client: AsyncClient, london_airports):
        """Test only active airports inside the radius come back, closest first."""
        params = {"latitude": "51.4700", "longitude": "-0.4543", "radius_km": 100}
        response = await client.get(f"{BASE}/nearby", params=params)

        assert response.status_code == 200
        results = response.json()["data"]
        assert [r["airport"]["iata_code"] for r in results] == ["LHR", "LGW"]
        assert results[0]["distance_km"] == 0
        assert 35 < results[1]["distance_km"] < 45

        params["radius_km"] = 500
        params["limit"] = 2
        response = await client.get(f"{BASE}/nearby", params=params)
        assert [r["airport"]["iata_code"] for r in response.json()["data"]] == ["LHR", "LGW"]

        params["limit"] = 10
        response = await client.get(f"{BASE}/nearby", params=params)
        assert [r["airport"]["iata_code"] for r in response.json()["data"]] == ["LHR", "LGW", "CDG"]

    @pytest.mark.asyncio
    async def test_nearby_requires_coordinates(self, client: AsyncClient):
        response = await client.get(f"{BASE}/nearby", params={"latitude": "95", "longitude": "0"})
        assert response.status_code == 422

        response = await client.get(f"{BASE}/nearby", params={"latitude": "10"})
        assert response.status_code == 422
