"""
Repository abstract base class and generic implementation.

Every read goes through the soft-delete filter (``is_deleted == False``); only
``get_by_id_including_deleted`` bypasses it. Writes are staged on the session and
become durable when the owning UnitOfWork saves.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Type, Any, Iterable, Union
from uuid import UUID
from sqlalchemy import asc, desc, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.database.entity import BaseEntity
from framework.exceptions.handler import InvalidArgumentError

T = TypeVar("T", bound=BaseEntity)

OrderBy = Union[str, Any]


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[T]:
        """Get a non-deleted entity by ID, or None."""

    @abstractmethod
    async def get_all(self) -> List[T]:
        """Get all non-deleted entities."""

    @abstractmethod
    async def find(self, *criteria, **filters) -> List[T]:
        """Get non-deleted entities matching the predicate."""

    @abstractmethod
    async def first_or_default(self, *criteria, **filters) -> Optional[T]:
        """Get the first non-deleted match, or None."""

    @abstractmethod
    async def any(self, *criteria, **filters) -> bool:
        """Check whether a non-deleted match exists."""

    @abstractmethod
    async def count(self, *criteria, **filters) -> int:
        """Count non-deleted matches (all non-deleted without a predicate)."""

    @abstractmethod
    async def add(self, entity: T) -> T:
        """Stage entity for insertion."""

    @abstractmethod
    async def add_range(self, entities: Iterable[T]) -> List[T]:
        """Stage entities for insertion."""

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Stage entity modification."""

    @abstractmethod
    async def update_range(self, entities: Iterable[T]) -> List[T]:
        """Stage modification of several entities."""

    @abstractmethod
    async def remove(self, entity: T) -> None:
        """Stage physical deletion."""

    @abstractmethod
    async def remove_range(self, entities: Iterable[T]) -> None:
        """Stage physical deletion of several entities."""

    @abstractmethod
    async def soft_delete(self, id: UUID) -> bool:
        """Flag entity as deleted; silently does nothing when absent."""

    @abstractmethod
    async def get_paged(
        self,
        page: int,
        page_size: int,
        order_by: Optional[OrderBy] = None,
        ascending: bool = True,
    ) -> List[T]:
        """Get one page of non-deleted entities (page is 1-based)."""


class BaseRepository(IRepository[T]):
    """Generic repository implementation with SQLModel CRUD; subclasses can add custom queries."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model

    # --- statement helpers ---

    def _query(self, *criteria, **filters):
        """SELECT over non-deleted rows with the given predicate applied."""
        statement = select(self.model).where(self.model.is_deleted == False)  # noqa: E712
        return self._apply_filters(statement, criteria, filters)

    def _apply_filters(self, statement, criteria, filters):
        for criterion in criteria:
            statement = statement.where(criterion)
        for key, value in filters.items():
            statement = statement.where(self._column(key) == value)
        return statement

    def _column(self, name: str):
        if name not in self.model.model_fields:
            raise InvalidArgumentError(f"{self.model.__name__} has no field '{name}'")
        return getattr(self.model, name)

    def _order(self, statement, order_by: Optional[OrderBy], ascending: bool):
        if order_by is None:
            return statement.order_by(self.model.id)
        if isinstance(order_by, str):
            order_by = self._column(order_by)
        direction = asc if ascending else desc
        # id breaks ties so page boundaries stay stable
        return statement.order_by(direction(order_by), self.model.id)

    @staticmethod
    def validate_paging(page: int, page_size: int) -> None:
        if page < 1:
            raise InvalidArgumentError(f"page must be >= 1, got {page}")
        if page_size < 1:
            raise InvalidArgumentError(f"page_size must be >= 1, got {page_size}")

    def _paginate(self, statement, page: int, page_size: int):
        self.validate_paging(page, page_size)
        return statement.offset((page - 1) * page_size).limit(page_size)

    # --- queries ---

    async def get_by_id(self, id: UUID) -> Optional[T]:
        """Get entity by ID."""
        result = await self.session.exec(self._query(self.model.id == id))
        return result.first()

    async def get_by_id_including_deleted(self, id: UUID) -> Optional[T]:
        """Get entity by ID ignoring the soft-delete flag."""
        statement = select(self.model).where(self.model.id == id)
        result = await self.session.exec(statement)
        return result.first()

    async def get_all(self) -> List[T]:
        result = await self.session.exec(self._query())
        return list(result.all())

    async def find(self, *criteria, **filters) -> List[T]:
        """Find entities by SQL expressions and/or equality filters (e.g. company_id=...)."""
        result = await self.session.exec(self._query(*criteria, **filters))
        return list(result.all())

    async def first_or_default(self, *criteria, **filters) -> Optional[T]:
        statement = self._query(*criteria, **filters).limit(1)
        result = await self.session.exec(statement)
        return result.first()

    async def any(self, *criteria, **filters) -> bool:
        statement = select(self.model.id).where(self.model.is_deleted == False)  # noqa: E712
        statement = self._apply_filters(statement, criteria, filters).limit(1)
        result = await self.session.exec(statement)
        return result.first() is not None

    async def count(self, *criteria, **filters) -> int:
        """Count entities matching filters."""
        statement = select(func.count(self.model.id)).where(self.model.is_deleted == False)  # noqa: E712
        statement = self._apply_filters(statement, criteria, filters)
        result = await self.session.exec(statement)
        return result.one()

    async def get_paged(
        self,
        page: int,
        page_size: int,
        order_by: Optional[OrderBy] = None,
        ascending: bool = True,
    ) -> List[T]:
        """Get one page; order_by is a column, expression or field name (primary key by default)."""
        statement = self._order(self._query(), order_by, ascending)
        result = await self.session.exec(self._paginate(statement, page, page_size))
        return list(result.all())

    # --- staged writes ---

    async def add(self, entity: T) -> T:
        """Create entity."""
        self.session.add(entity)
        return entity

    async def add_range(self, entities: Iterable[T]) -> List[T]:
        entities = list(entities)
        self.session.add_all(entities)
        return entities

    async def update(self, entity: T) -> T:
        """Update entity; updated_at is refreshed here, not at commit."""
        entity.touch()
        self.session.add(entity)
        return entity

    async def update_range(self, entities: Iterable[T]) -> List[T]:
        entities = list(entities)
        for entity in entities:
            await self.update(entity)
        return entities

    async def remove(self, entity: T) -> None:
        """Physically delete entity (owned children follow their ORM cascade)."""
        await self.session.delete(entity)

    async def remove_range(self, entities: Iterable[T]) -> None:
        for entity in list(entities):
            await self.remove(entity)

    async def soft_delete(self, id: UUID) -> bool:
        """Soft delete by ID; returns False (and changes nothing) when absent or already deleted."""
        entity = await self.get_by_id(id)
        if entity is None:
            return False
        entity.mark_deleted()
        self.session.add(entity)
        return True

    async def soft_delete_where(self, *criteria, **filters) -> int:
        """Soft delete every non-deleted match; returns how many were flagged."""
        entities = await self.find(*criteria, **filters)
        for entity in entities:
            entity.mark_deleted()
        self.session.add_all(entities)
        return len(entities)
