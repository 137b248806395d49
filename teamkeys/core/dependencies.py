from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import async_sessionmaker

from teamkeys.core.pagination import Pagination, get_pagination
from teamkeys.db.session import async_session_factory


def get_session_factory() -> async_sessionmaker:
    """
    Session factory used to open each request's UnitOfWork.

    Overridden in tests to point at a throwaway database.
    """
    return async_session_factory


# Type definitions for dependencies
SessionFactoryDep = Annotated[async_sessionmaker, Depends(get_session_factory)]
PaginationDep = Annotated[Pagination, Depends(get_pagination)]
