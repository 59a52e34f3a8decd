from typing import AsyncGenerator
from sqlmodel import SQLModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from .base import BaseDatabaseDriver


def build_session_factory(engine: AsyncEngine) -> sessionmaker:
    """Session factory used by the app and by tests; objects survive commit."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class SQLDriver(BaseDatabaseDriver):
    """Async SQLAlchemy engine for any relational URL (aiomysql in production, aiosqlite in tests)."""

    def __init__(self, url: str, echo: bool = False):
        self.engine = create_async_engine(url, echo=echo, future=True)
        self.session_factory = build_session_factory(self.engine)

    async def connect(self):
        """Ping the database once (the engine manages the pool)."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self):
        """Create every registered table; development only, production uses Alembic."""
        import apps.models  # noqa: F401  register tables on SQLModel.metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def disconnect(self):
        await self.engine.dispose()

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            yield session
