"""
Health API Router.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select, func, text
from sqlalchemy.ext.asyncio import AsyncSession

from lifecycle_api.models import Shop
from lifecycle_api.routers.dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Deep Health Check: Verifies Database Connectivity."""
    try:
        await db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        # Return 503 so load balancers know to stop sending traffic
        raise HTTPException(status_code=503, detail="Database disconnected")


@router.get("/api/health")
async def shop_health(db: AsyncSession = Depends(get_db)):
    """Liveness plus a count of connected shops."""
    shop_count = (await db.execute(select(func.count(Shop.id)))).scalar() or 0
    return {"ok": True, "shopCount": shop_count}
