"""
Simple test cases to verify test configuration.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

@pytest.mark.asyncio
async def test_app_exists(client: AsyncClient):
    """Test that app exists and serves its OpenAPI schema."""
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    assert "/api/v1/airports/" in response.json()["paths"]

@pytest.mark.asyncio
async def test_database_session(async_session: AsyncSession):
    """Test that database session works."""
    assert async_session is not None
    # Run a simple query
    from sqlalchemy import text
    result = await async_session.execute(text("SELECT 1"))
    assert result.scalar() == 1

@pytest.mark.asyncio
async def test_trace_id_header(client: AsyncClient):
    """Test that the logging middleware echoes the trace id."""
    response = await client.get("/api/v1/airports/", headers={"X-Trace-ID": "abc123"})
    assert response.headers["X-Trace-ID"] == "abc123"
