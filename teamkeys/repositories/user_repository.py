from sqlalchemy.ext.asyncio import AsyncSession

from teamkeys.core.base_repository import BaseRepository
from teamkeys.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User model. Users are read, never written, here."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)
