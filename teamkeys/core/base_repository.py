from typing import Generic, Optional, Type, TypeVar
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from teamkeys.db.base import Base

# Define generic type for models
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelType]):
    """
    Base class for all repositories implementing common CRUD operations.

    Repositories only flush; committing and rolling back belong to the
    enclosing UnitOfWork.
    """

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository with model and session.

        Args:
            model: SQLAlchemy model class
            session: SQLAlchemy async session
        """
        self.model = model
        self.session = session

    async def get(self, id: str, lock: bool = False) -> Optional[ModelType]:
        """
        Get a single record by ID.

        Args:
            id: ID of the record to get
            lock: Take a row-level exclusive lock held until the transaction ends

        Returns:
            The model instance if found, else None
        """
        query = select(self.model).where(self.model.id == id)
        if lock:
            query = query.with_for_update(of=self.model)
            # A row already in the identity map must be re-read under the lock
            query = query.execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def create(self, obj_in: dict) -> ModelType:
        """
        Create a new record.

        Args:
            obj_in: Dictionary of values to create model with

        Returns:
            The created model instance, flushed so DB defaults are populated
        """
        logger.debug(f"Creating new {self.model.__name__}")
        db_obj = self.model(**obj_in)
        self.session.add(db_obj)
        await self.session.flush()
        logger.debug(f"Created {self.model.__name__} with ID: {db_obj.id}")
        return db_obj

    async def destroy(self, db_obj: ModelType) -> bool:
        """
        Delete an already loaded record.

        The DELETE is matched by primary key and its row count checked, so a
        caller that lost a race to another transaction finds out here even
        on backends that ignore row locks.

        Args:
            db_obj: Model instance to delete

        Returns:
            True if a row was deleted, False if it was already gone
        """
        logger.debug(f"Deleting {self.model.__name__} with ID {db_obj.id}")
        stmt = (
            delete(self.model)
            .where(self.model.id == db_obj.id)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
