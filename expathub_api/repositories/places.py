# expathub_api/repositories/places.py
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from expathub_shared.models import Place
from ..schemas.place import PlaceFilters

# Значения фильтров, которые означают "без фильтра"
ALL_CATEGORIES = {"all"}
ALL_LOCATIONS = {"all", "전체"}


class PlaceRepository:
    """Запросы к таблице мест"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch_places(self, filters: Optional[PlaceFilters] = None) -> List[Place]:
        """Активные места, сначала новые"""
        filters = filters or PlaceFilters()
        query = select(Place).where(Place.is_active == True)

        if filters.country:
            query = query.where(Place.country == filters.country)
        if filters.type:
            query = query.where(Place.type == filters.type.value)
        if filters.category and filters.category not in ALL_CATEGORIES:
            query = query.where(Place.category == filters.category)
        if filters.location and filters.location not in ALL_LOCATIONS:
            query = query.where(Place.location == filters.location)

        query = query.order_by(Place.created_at.desc())
        if filters.limit:
            query = query.limit(filters.limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, place_id: str) -> Optional[Place]:
        """Одно активное место"""
        result = await self.db.execute(
            select(Place).where(Place.id == place_id, Place.is_active == True)
        )
        return result.scalar_one_or_none()
