"""
Repository pattern: soft-delete aware data access over an AsyncSession, with the
UnitOfWork owning the session and its transaction boundaries.
"""

from .base import BaseRepository, IRepository, OrderBy
from .unit_of_work import UnitOfWork

__all__ = ["BaseRepository", "IRepository", "OrderBy", "UnitOfWork"]
