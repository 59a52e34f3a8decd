"""Shared FastAPI dependencies: database session, unit of work, paging."""

from typing import AsyncGenerator, Optional
from fastapi import Depends
from pydantic import BaseModel
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.exceptions.handler import InvalidArgumentError
from apps.unit_of_work import MarketplaceUnitOfWork


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    manager = DatabaseManager.get_instance()
    async for session in manager.sql.get_session():
        yield session


async def get_uow(
    db: AsyncSession = Depends(get_db)
) -> AsyncGenerator[MarketplaceUnitOfWork, None]:
    """Dependency: one unit of work per request, disposed when the request ends."""
    uow = MarketplaceUnitOfWork(session=db)
    try:
        yield uow
    finally:
        await uow.dispose()


class PageParams(BaseModel):
    page: int
    page_size: int


def get_page_params(page: int = 1, page_size: Optional[int] = None) -> PageParams:
    """
    Query-string paging. Non-positive values are passed through on purpose: the
    repository rejects them with InvalidArgumentError.
    """
    if page_size is None:
        page_size = settings.DEFAULT_PAGE_SIZE
    if page_size > settings.MAX_PAGE_SIZE:
        raise InvalidArgumentError(f"page_size must be <= {settings.MAX_PAGE_SIZE}, got {page_size}")
    return PageParams(page=page, page_size=page_size)
