"""
Unit of Work: manages repositories and transaction boundaries.

One instance owns one AsyncSession for one logical operation (typically one request)
and is not shared between concurrent tasks. States are NoTransaction and
InTransaction; ``begin_transaction`` while InTransaction raises TransactionStateError.
"""

from typing import Any, Callable, Dict, Optional
from sqlalchemy import event
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.exceptions.handler import TransactionStateError
from framework.logging.logger import get_logger

logger = get_logger("unit_of_work")


class UnitOfWork:
    """Manages related repositories with a shared session and transaction commit/rollback."""

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork; session must be provided (e.g. UnitOfWork.from_session())."""
        if session is None:
            raise ValueError("Session must be provided. Use UnitOfWork.from_session() or pass session explicitly.")

        self.session = session
        self._repositories: Dict[str, Any] = {}
        self._transaction = None
        self._pending_writes = 0
        self._disposed = False
        self._flush_listener = self._count_writes
        event.listen(self.session.sync_session, "before_flush", self._flush_listener)

    @classmethod
    async def from_session(cls, session: AsyncSession) -> "UnitOfWork":
        """Create UnitOfWork from an existing session."""
        return cls(session=session)

    @classmethod
    def from_session_factory(cls, session_factory: Callable[[], AsyncSession]) -> "UnitOfWork":
        """Create UnitOfWork over a fresh session it alone owns."""
        return cls(session=session_factory())

    def get_repository(self, repo_class, model_class):
        """Get or create a repository instance (cached)."""
        cache_key = f"{repo_class.__name__}_{model_class.__name__}"
        if cache_key not in self._repositories:
            self._repositories[cache_key] = repo_class(self.session)
        return self._repositories[cache_key]

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    def _count_writes(self, session, flush_context, instances) -> None:
        # before_flush sees autoflushed writes too, so nothing staged goes uncounted
        modified = sum(1 for obj in session.dirty if session.is_modified(obj))
        self._pending_writes += len(session.new) + len(session.deleted) + modified

    def _take_pending_writes(self) -> int:
        written, self._pending_writes = self._pending_writes, 0
        return written

    async def save_changes(self) -> int:
        """
        Flush every staged insert/update/delete and return how many entities were written.

        Without an explicit transaction the flush is committed at once, or rolled back
        entirely on failure. Inside begin_transaction() the writes only become durable
        on commit_transaction().
        """
        try:
            await self.session.flush()
            if self._transaction is None:
                await self.session.commit()
        except Exception:
            if self._transaction is None:
                await self.session.rollback()
                self._take_pending_writes()
            raise

        written = self._take_pending_writes()
        logger.debug(f"save_changes wrote {written} entities (in_transaction={self.in_transaction})")
        return written

    async def begin_transaction(self) -> None:
        """Open an explicit transaction spanning several save_changes() calls."""
        if self._transaction is not None:
            raise TransactionStateError("A transaction is already active on this unit of work")

        # A read may already have autobegun the session transaction; adopt it
        if self.session.in_transaction():
            self._transaction = self.session.get_transaction()
        else:
            self._transaction = await self.session.begin()
        logger.debug("Transaction started")

    async def commit_transaction(self) -> None:
        """Commit the explicit transaction; no-op when none is active."""
        if self._transaction is None:
            return
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        finally:
            self._transaction = None
            self._take_pending_writes()
        logger.debug("Transaction committed")

    async def rollback_transaction(self) -> None:
        """Discard everything since begin_transaction(); no-op when none is active."""
        if self._transaction is None:
            return
        try:
            await self.session.rollback()
        finally:
            self._transaction = None
            self._take_pending_writes()
        logger.debug("Transaction rolled back")

    async def dispose(self) -> None:
        """Roll back any open transaction and release the session; safe to call repeatedly."""
        if self._disposed:
            return
        self._disposed = True
        try:
            await self.rollback_transaction()
        finally:
            if event.contains(self.session.sync_session, "before_flush", self._flush_listener):
                event.remove(self.session.sync_session, "before_flush", self._flush_listener)
            await self.session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None and self.in_transaction:
            logger.warning(f"Rolling back transaction after {exc_type.__name__}: {exc_val}")
        await self.dispose()
