from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from teamkeys.core.base_repository import BaseRepository
from teamkeys.models.api_key import ApiKey
from teamkeys.models.user import User
from teamkeys.services.api_key_scope import ApiKeyScope, OwnKeys, SpecificUserKeys


class ApiKeyRepository(BaseRepository[ApiKey]):
    """
    Repository for ApiKey model with custom query methods.
    Inherits base CRUD operations from BaseRepository.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the repository with session.

        Args:
            session: SQLAlchemy async session
        """
        super().__init__(ApiKey, session)

    async def find_by_hash(self, hash: str) -> Optional[ApiKey]:
        """
        Find an API key by the sha256 hash of its secret.

        Args:
            hash: Hex digest to search for

        Returns:
            ApiKey if found, else None
        """
        query = select(self.model).where(self.model.hash == hash)
        result = await self.session.execute(query)
        return result.scalars().first()

    @staticmethod
    def _scoped(query, scope: ApiKeyScope):
        # Inner join: keys without a matching user never show up
        query = query.join(User, User.id == ApiKey.user_id).where(User.team_id == scope.team_id)
        if isinstance(scope, (OwnKeys, SpecificUserKeys)):
            query = query.where(User.id == scope.user_id)
        return query

    async def find_all_in_scope(self, scope: ApiKeyScope, offset: int = 0, limit: int = 25) -> List[ApiKey]:
        """
        Find the keys visible in ``scope``, newest first.

        Args:
            scope: Resolved visibility scope
            offset: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of API keys
        """
        query = (
            self._scoped(select(self.model), scope)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().unique().all())

    async def count_in_scope(self, scope: ApiKeyScope) -> int:
        """Count the keys visible in ``scope``."""
        query = self._scoped(select(func.count(self.model.id)).select_from(self.model), scope)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def touch_last_active(self, id: str, at: datetime) -> None:
        """Record that the key was used at ``at``."""
        stmt = update(self.model).where(self.model.id == id).values(last_active_at=at)
        await self.session.execute(stmt)
