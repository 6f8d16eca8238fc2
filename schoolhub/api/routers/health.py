# schoolhub/api/routers/health.py

from typing import Annotated

from fastapi import APIRouter, Depends

from schoolhub.api.dependencies import get_correlation_id
from schoolhub.config.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health(correlation_id: Annotated[str, Depends(get_correlation_id)]):
    """Health check echoing the request's correlation ID."""
    settings = get_settings()
    return {
        "status": "ok",
        "correlation_id": correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }
