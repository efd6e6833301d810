import json
from typing import Any, Dict, List, Optional, Sequence
import redis.asyncio as redis
import logging

from ..schemas.place import PlaceAggregate

logger = logging.getLogger(__name__)

class CacheService:
    """Сервис кэширования Redis"""
    
    def __init__(self, redis_url: Optional[str] = None, client=None):
        self.redis = client if client is not None else redis.from_url(redis_url, decode_responses=True)
    
    async def get(self, key: str) -> Optional[Any]:
        """Получить значение по ключу"""
        try:
            data = await self.redis.get(key)
            return json.loads(data) if data else None
        except Exception as e:
            logger.error(f"Cache get error for key {key}: {e}")
            return None
    
    async def get_many(self, keys: Sequence[str]) -> List[Optional[Any]]:
        """Получить несколько значений одним запросом"""
        if not keys:
            return []
        try:
            values = await self.redis.mget(list(keys))
            return [json.loads(v) if v else None for v in values]
        except Exception as e:
            logger.error(f"Cache mget error for {len(keys)} keys: {e}")
            return [None] * len(keys)
    
    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Установить значение с TTL"""
        try:
            await self.redis.setex(key, ttl, json.dumps(value, ensure_ascii=False))
            return True
        except Exception as e:
            logger.error(f"Cache set error for key {key}: {e}")
            return False
    
    async def delete(self, key: str) -> bool:
        """Удалить ключ"""
        try:
            await self.redis.delete(key)
            return True
        except Exception as e:
            logger.error(f"Cache delete error for key {key}: {e}")
            return False


class PlaceStatsCache:
    """Кэш статистики мест: ключ на место, сбрасывается при записи отзыва"""
    
    KEY_PREFIX = "stats:place:"
    
    def __init__(self, cache: CacheService, ttl: int = 300):
        self.cache = cache
        self.ttl = ttl
    
    def _key(self, place_id: str) -> str:
        return f"{self.KEY_PREFIX}{place_id}"
    
    async def get_many(self, place_ids: Sequence[str]) -> Dict[str, PlaceAggregate]:
        """Статистика из кэша; отсутствующие места в результат не попадают"""
        values = await self.cache.get_many([self._key(pid) for pid in place_ids])
        found = {}
        for place_id, value in zip(place_ids, values):
            if value is not None:
                found[place_id] = PlaceAggregate.model_validate(value)
        return found
    
    async def store(self, aggregates: Dict[str, PlaceAggregate]) -> None:
        for place_id, stats in aggregates.items():
            await self.cache.set(self._key(place_id), stats.model_dump(), ttl=self.ttl)
    
    async def invalidate(self, place_id: str) -> None:
        await self.cache.delete(self._key(place_id))
        logger.debug(f"Stats cache invalidated for place {place_id}")
