# expathub_api/dependencies.py
"""
Зависимости FastAPI
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from expathub_shared.config import config
from .database import get_db
from .repositories import PlaceRepository, ReviewRepository
from .services.cache import CacheService, PlaceStatsCache
from .services.listings import ListingService
from .services.reviews import ReviewService
from .services.translation import TranslationService


async def get_db_session(db: AsyncSession = Depends(get_db)) -> AsyncSession:
    return db


def get_place_repository(db: AsyncSession = Depends(get_db_session)) -> PlaceRepository:
    return PlaceRepository(db)


def get_review_repository(db: AsyncSession = Depends(get_db_session)) -> ReviewRepository:
    return ReviewRepository(db)


@lru_cache
def _stats_cache() -> PlaceStatsCache:
    return PlaceStatsCache(CacheService(config.REDIS_URL), ttl=config.STATS_CACHE_TTL)


def get_stats_cache() -> Optional[PlaceStatsCache]:
    """Кэш статистики мест (если включен в настройках)"""
    if not config.STATS_CACHE_ENABLED:
        return None
    return _stats_cache()


def get_listing_service(
    places: PlaceRepository = Depends(get_place_repository),
    reviews: ReviewRepository = Depends(get_review_repository),
    stats_cache: Optional[PlaceStatsCache] = Depends(get_stats_cache),
) -> ListingService:
    return ListingService(places, reviews, stats_cache)


def get_review_service(
    reviews: ReviewRepository = Depends(get_review_repository),
    places: PlaceRepository = Depends(get_place_repository),
    stats_cache: Optional[PlaceStatsCache] = Depends(get_stats_cache),
) -> ReviewService:
    return ReviewService(reviews, places, stats_cache)


@lru_cache
def get_translation_service() -> TranslationService:
    return TranslationService()


def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """ID пользователя из BaaS (аутентификация выполняется на стороне BaaS)"""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Login required")
    return x_user_id.strip()
