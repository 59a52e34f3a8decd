"""Airport repository implementation."""

from typing import List, Optional, Tuple
from sqlalchemy import func, or_
from sqlmodel import select
from framework.repository.base import BaseRepository
from .models import Airport


def _contains(column, text: str):
    """Case-insensitive substring match."""
    return func.lower(column).like(f"%{text.lower()}%")


class AirportRepository(BaseRepository[Airport]):
    """Airport repository."""

    def __init__(self, session):
        super().__init__(session, Airport)

    async def get_by_iata(self, iata_code: str) -> Optional[Airport]:
        return await self.first_or_default(iata_code=iata_code.strip().upper())

    @staticmethod
    def build_criteria(
        country: Optional[str] = None,
        city: Optional[str] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> list:
        criteria = []
        if search:
            criteria.append(or_(
                _contains(Airport.name, search),
                _contains(Airport.city, search),
                _contains(Airport.iata_code, search),
                _contains(Airport.icao_code, search),
            ))
        if country:
            criteria.append(_contains(Airport.country, country))
        if city:
            criteria.append(_contains(Airport.city, city))
        if is_active is not None:
            criteria.append(Airport.is_active == is_active)
        return criteria

    async def list_page(
        self,
        page: int,
        page_size: int,
        country: Optional[str] = None,
        city: Optional[str] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[Airport], int]:
        """
        One page of airports sorted by name, plus the total number of matches.

        Args:
            page: 1-based page number
            page_size: Page size
            country / city / search: Case-insensitive substring filters
            is_active: Optional active flag filter

        Returns:
            (airports, total_count)
        """
        criteria = self.build_criteria(country, city, search, is_active)
        statement = self._order(self._query(*criteria), Airport.name, True)
        result = await self.session.exec(self._paginate(statement, page, page_size))
        total = await self.count(*criteria)
        return list(result.all()), total

    async def search_active(self, query: str, limit: int = 10) -> List[Airport]:
        """Match name, city, country, IATA or ICAO code among active airports."""
        matches = or_(
            _contains(Airport.name, query),
            _contains(Airport.city, query),
            _contains(Airport.country, query),
            _contains(Airport.iata_code, query),
            _contains(Airport.icao_code, query),
        )
        statement = self._query(matches, Airport.is_active == True).order_by(Airport.name).limit(limit)  # noqa: E712
        result = await self.session.exec(statement)
        return list(result.all())

    async def list_countries(self) -> List[str]:
        """Distinct countries of active airports, sorted."""
        statement = (
            select(Airport.country)
            .where(Airport.is_deleted == False, Airport.is_active == True)  # noqa: E712
            .distinct()
            .order_by(Airport.country)
        )
        result = await self.session.exec(statement)
        return list(result.all())

    async def list_cities(self, country: str) -> List[str]:
        """Distinct cities with an active airport in the country, sorted."""
        statement = (
            select(Airport.city)
            .where(
                Airport.is_deleted == False,  # noqa: E712
                Airport.is_active == True,  # noqa: E712
                func.lower(Airport.country) == country.strip().lower(),
            )
            .distinct()
            .order_by(Airport.city)
        )
        result = await self.session.exec(statement)
        return list(result.all())

    async def iata_in_use(self, iata_code: str) -> bool:
        """True when any airport row holds the code, soft-deleted ones included."""
        statement = select(Airport.id).where(Airport.iata_code == iata_code.strip().upper()).limit(1)
        result = await self.session.exec(statement)
        return result.first() is not None
