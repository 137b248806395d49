from fastapi import APIRouter

from teamkeys.api.api_keys_router import router as api_keys_router
from teamkeys.api.healthcheck_router import router as healthcheck_router

# Create the main API router
api_router = APIRouter()

# Include all the sub-routers
api_router.include_router(api_keys_router)
api_router.include_router(healthcheck_router)
