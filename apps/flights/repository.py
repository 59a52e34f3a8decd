"""Flight repository implementation."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple
from uuid import UUID
from framework.repository.base import BaseRepository
from .models import Flight, FlightStatus

SORT_COLUMNS = {
    "departure_time": Flight.departure_time,
    "price": Flight.current_price,
}


class FlightRepository(BaseRepository[Flight]):
    """Flight repository."""

    def __init__(self, session):
        super().__init__(session, Flight)

    async def list_by_company(self, company_id: UUID) -> List[Flight]:
        return await self.find(company_id=company_id)

    async def search(
        self,
        page: int,
        page_size: int,
        departure_airport_id: Optional[UUID] = None,
        arrival_airport_id: Optional[UUID] = None,
        departure_from: Optional[datetime] = None,
        departure_to: Optional[datetime] = None,
        passenger_count: Optional[int] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        sort_by: str = "departure_time",
        descending: bool = False,
        now: Optional[datetime] = None,
    ) -> Tuple[List[Flight], int]:
        """
        Bookable flights (AVAILABLE, departing after ``now``) matching the filters.

        Returns:
            (flights for the requested page, total_count)
        """
        now = now or datetime.now(timezone.utc)
        criteria = [
            Flight.status == FlightStatus.AVAILABLE,
            Flight.departure_time > now,
        ]
        if departure_airport_id:
            criteria.append(Flight.departure_airport_id == departure_airport_id)
        if arrival_airport_id:
            criteria.append(Flight.arrival_airport_id == arrival_airport_id)
        if departure_from:
            criteria.append(Flight.departure_time >= departure_from)
        if departure_to:
            criteria.append(Flight.departure_time <= departure_to)
        if passenger_count:
            criteria.append(Flight.available_seats >= passenger_count)
        if min_price is not None:
            criteria.append(Flight.current_price >= min_price)
        if max_price is not None:
            criteria.append(Flight.current_price <= max_price)

        order_column = SORT_COLUMNS.get(sort_by, Flight.departure_time)
        statement = self._order(self._query(*criteria), order_column, not descending)
        result = await self.session.exec(self._paginate(statement, page, page_size))
        total = await self.count(*criteria)
        return list(result.all()), total
