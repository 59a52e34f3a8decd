"""Operator module repository implementations."""

from typing import List, Optional
from uuid import UUID
from framework.repository.base import BaseRepository
from .models import Aircraft, Company, Review


class CompanyRepository(BaseRepository[Company]):
    """Company repository."""

    def __init__(self, session):
        super().__init__(session, Company)

    async def get_by_name(self, name: str) -> Optional[Company]:
        return await self.first_or_default(name=name)

    async def list_active(self) -> List[Company]:
        return await self.find(is_active=True)


class AircraftRepository(BaseRepository[Aircraft]):
    """Aircraft repository."""

    def __init__(self, session):
        super().__init__(session, Aircraft)

    async def get_by_registration(self, registration: str) -> Optional[Aircraft]:
        return await self.first_or_default(registration=registration.upper())

    async def get_for_company(self, aircraft_id: UUID, company_id: UUID) -> Optional[Aircraft]:
        """Get aircraft only if it belongs to the given company."""
        return await self.first_or_default(id=aircraft_id, company_id=company_id)

    async def list_by_company(self, company_id: UUID) -> List[Aircraft]:
        return await self.find(company_id=company_id)


class ReviewRepository(BaseRepository[Review]):
    """Review repository."""

    def __init__(self, session):
        super().__init__(session, Review)

    async def list_visible_for_company(self, company_id: UUID) -> List[Review]:
        return await self.find(company_id=company_id, is_visible=True)

    async def list_visible_for_flight(self, flight_id: UUID) -> List[Review]:
        return await self.find(flight_id=flight_id, is_visible=True)
