from sqlalchemy.ext.asyncio import AsyncSession

from teamkeys.core.base_repository import BaseRepository
from teamkeys.models.event import Event


class EventRepository(BaseRepository[Event]):
    """Repository for the append-only Event model."""

    def __init__(self, session: AsyncSession):
        super().__init__(Event, session)
