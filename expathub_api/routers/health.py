from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
import logging

from ..dependencies import get_db_session

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db_session)):
    """Проверка работоспособности сервиса"""
    # Проверка БД
    db_ok = False
    try:
        await db.execute(text("SELECT 1"))
        db_ok = True
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Health check: database unavailable: {e}")
    
    return {
        "status": "healthy" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if db_ok else "disconnected",
        "service": "expathub-api",
    }
