"""Identity module repository implementations."""

from typing import List, Optional
from uuid import UUID
from framework.database.entity import utc_now
from framework.repository.base import BaseRepository
from .models import RefreshToken, User, UserAlert


class UserRepository(BaseRepository[User]):
    """User repository."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Find user by email (stored lower-cased)."""
        return await self.first_or_default(email=email.strip().lower())

    async def email_exists(self, email: str) -> bool:
        return await self.any(email=email.strip().lower())

    async def list_by_company(self, company_id: UUID) -> List[User]:
        return await self.find(company_id=company_id)


class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Refresh token repository."""

    def __init__(self, session):
        super().__init__(session, RefreshToken)

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        return await self.first_or_default(token=token)

    async def list_active_for_user(self, user_id: UUID) -> List[RefreshToken]:
        """Tokens of a user that are neither revoked nor expired."""
        return await self.find(RefreshToken.expires_at > utc_now(), user_id=user_id, is_revoked=False)


class UserAlertRepository(BaseRepository[UserAlert]):
    """User alert repository."""

    def __init__(self, session):
        super().__init__(session, UserAlert)

    async def list_active_for_user(self, user_id: UUID) -> List[UserAlert]:
        return await self.find(user_id=user_id, is_active=True)
