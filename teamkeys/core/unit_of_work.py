"""
Unit of Work Pattern Implementation

This module implements the Unit of Work pattern for managing
database transactions and repository lifecycle.
"""

import logging
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from teamkeys.repositories.api_key_repository import ApiKeyRepository
from teamkeys.repositories.event_repository import EventRepository
from teamkeys.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Manages repositories and transactions as a unit.

    All repositories share the same session. Leaving the context commits;
    any exception, including cancellation, rolls the whole transaction back.
    """

    def __init__(self, session_factory: Optional[Callable[[], AsyncSession]] = None):
        self._session_factory = session_factory
        self.session: Optional[AsyncSession] = None
        self.user_repository: Optional[UserRepository] = None
        self.api_key_repository: Optional[ApiKeyRepository] = None
        self.event_repository: Optional[EventRepository] = None

    async def __aenter__(self):
        """
        Enter async context and create all repositories with a single session.

        Returns:
            UnitOfWork: Self reference with all repositories initialized
        """
        if self._session_factory is None:
            from teamkeys.db.session import async_session_factory
            self._session_factory = async_session_factory

        self.session = self._session_factory()

        self.user_repository = UserRepository(self.session)
        self.api_key_repository = ApiKeyRepository(self.session)
        self.event_repository = EventRepository(self.session)

        logger.debug("UnitOfWork initialized with repositories")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the async context, committing or rolling back as appropriate.

        Args:
            exc_type: Exception type if an exception occurred, else None
            exc_val: Exception value if an exception occurred, else None
            exc_tb: Exception traceback if an exception occurred, else None
        """
        try:
            if exc_type is not None:
                logger.debug(f"UnitOfWork exiting with exception, rolling back: {exc_type.__name__}: {exc_val}")
                await self.session.rollback()
            else:
                try:
                    await self.session.commit()
                    logger.debug("UnitOfWork context committed on exit")
                except Exception as commit_error:
                    logger.error(f"Error committing in UnitOfWork.__aexit__: {commit_error}")
                    await self.session.rollback()
                    raise
        finally:
            # Always close the session to release connections back to the pool
            await self.session.close()
            self.user_repository = None
            self.api_key_repository = None
            self.event_repository = None
