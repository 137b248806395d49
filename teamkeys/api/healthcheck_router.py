import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from teamkeys.core.dependencies import SessionFactoryDep

router = APIRouter(
    prefix="/health",
    tags=["health"],
)

logger = logging.getLogger(__name__)


@router.get("")
async def health_check(session_factory: SessionFactoryDep):
    """
    Health check endpoint verifying the API and its database are reachable.

    Returns:
        dict: Status information; 503 when the database cannot be queried
    """
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}
