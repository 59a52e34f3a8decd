"""
Base entity shared by every table: UUID identity, audit timestamps and the soft-delete flag.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken as UTC; aware ones are converted."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BaseEntity(SQLModel):
    """
    Common columns for all entities.

    The id is generated when the object is constructed, so it is known right after
    ``repository.add()`` without a round trip. ``deleted_at`` is set exactly when
    ``is_deleted`` becomes true and is never set otherwise.
    """

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )
    is_deleted: bool = Field(default=False, index=True, nullable=False)
    deleted_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))

    def touch(self, when: Optional[datetime] = None) -> None:
        """Refresh updated_at."""
        self.updated_at = when or utc_now()

    def mark_deleted(self, when: Optional[datetime] = None) -> bool:
        """Flip the soft-delete flag; returns False if the entity was already deleted."""
        if self.is_deleted:
            return False
        when = when or utc_now()
        self.is_deleted = True
        self.deleted_at = when
        self.updated_at = when
        return True
