# expathub_api/services/listings.py
"""
Сервис списков мест: загрузка мест и отзывов, подсчёт статистики, карточки
"""

import asyncio
import logging
from typing import Awaitable, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from expathub_shared.config import config
from expathub_shared.models.enums import ReviewSort, Sentiment
from ..exceptions import PlaceNotFoundError
from ..repositories import PlaceRepository, ReviewRepository
from ..schemas.place import (
    DEFAULT_IMAGE_URL, ListingCard, MapItem, PlaceAggregate, PlaceDetailResponse,
    PlaceFilters, PlaceStatsResponse, PlaceWithStats,
)
from ..schemas.review import ReviewItem
from .cache import PlaceStatsCache
from .review_stats import assemble, build_place_aggregates, clamp_rating, empty_aggregate

logger = logging.getLogger(__name__)

RECENT_REVIEWS_LIMIT = 5


def to_listing_card(place: PlaceWithStats) -> ListingCard:
    """Место -> карточка для главной страницы"""
    return ListingCard(
        id=place.id,
        category=place.category,
        title=place.name,
        subtitle=place.subtitle or "",
        location=place.location or "",
        rating=place.average_rating,
        reviews=place.review_count,
        image=place.image_url or DEFAULT_IMAGE_URL,
        short_review=place.short_excerpt,
        tags=place.tags or [],
        work_hours=place.work_hours or "",
        benefits=place.benefits or [],
        deposit=place.deposit or "",
        size=place.size or "",
    )


def to_map_item(place: PlaceWithStats) -> MapItem:
    """Место -> маркер на карте"""
    return MapItem(
        id=place.id,
        name=place.name,
        type=place.type,
        category=place.category,
        rating=place.average_rating,
        reviews=place.review_count,
        lat=place.lat,
        lng=place.lng,
        subtitle=place.subtitle or "",
        short_review=place.short_excerpt,
    )


def to_review_item(review) -> ReviewItem:
    """Отзыв -> элемент списка на странице места"""
    created = review.created_at
    return ReviewItem(
        id=review.id,
        rating=review.rating,
        rating_details=review.rating_details or {},
        content=review.content or "",
        helpful_count=review.helpful_count or 0,
        author_name=review.author_name or "Anonymous",
        author_country=review.author_country or "Unknown",
        sentiment=review.sentiment or Sentiment.NEUTRAL,
        date=created.strftime("%Y.%m.%d") if created else "",
    )


class ListingService:
    """Места со статистикой отзывов"""
    
    def __init__(
        self,
        places: PlaceRepository,
        reviews: ReviewRepository,
        stats_cache: Optional[PlaceStatsCache] = None,
        fetch_timeout: Optional[float] = None,
        excerpt_length: Optional[int] = None,
        pros_markers: Optional[Sequence[str]] = None,
    ):
        self.places = places
        self.reviews = reviews
        self.stats_cache = stats_cache
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else config.STORE_FETCH_TIMEOUT
        self.excerpt_length = excerpt_length or config.EXCERPT_MAX_LENGTH
        self.pros_markers = tuple(pros_markers or config.EXCERPT_PROS_MARKERS)
    
    async def _fetch(self, what: str, call: Awaitable[list]) -> Optional[list]:
        """Запрос к хранилищу с таймаутом; при ошибке - None (вызывающий подставляет пустой список)"""
        try:
            return await asyncio.wait_for(call, timeout=self.fetch_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Fetching {what} timed out after {self.fetch_timeout}s, using empty result")
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Fetching {what} failed: {e}, using empty result")
        return None
    
    def _aggregates(self, reviews) -> Dict[str, PlaceAggregate]:
        return build_place_aggregates(reviews, self.excerpt_length, self.pros_markers)
    
    async def _stats_for(self, place_ids: List[str]) -> Dict[str, PlaceAggregate]:
        """Статистика для мест: из кэша, недостающее - по отзывам"""
        cached: Dict[str, PlaceAggregate] = {}
        if self.stats_cache is not None:
            cached = await self.stats_cache.get_many(place_ids)
        
        missing = [pid for pid in place_ids if pid not in cached]
        if not missing:
            return cached
        
        reviews = await self._fetch("reviews", self.reviews.fetch_for_places(missing))
        computed = self._aggregates(reviews or [])
        
        # Места без отзывов тоже кэшируем; после сбоя загрузки нули в кэш не пишем
        if self.stats_cache is not None and reviews is not None:
            fresh = {pid: computed.get(pid) or empty_aggregate(pid) for pid in missing}
            await self.stats_cache.store(fresh)
        
        return {**cached, **computed}
    
    async def get_listings(self, filters: Optional[PlaceFilters] = None) -> List[PlaceWithStats]:
        """Места по фильтрам со средним рейтингом, количеством отзывов и коротким отзывом"""
        places = await self._fetch("places", self.places.fetch_places(filters))
        if not places:
            return []
        
        stats = await self._stats_for([p.id for p in places])
        return assemble(places, stats)
    
    async def get_listing_cards(self, filters: Optional[PlaceFilters] = None) -> List[ListingCard]:
        return [to_listing_card(p) for p in await self.get_listings(filters)]
    
    async def get_map_items(self, filters: Optional[PlaceFilters] = None) -> List[MapItem]:
        return [to_map_item(p) for p in await self.get_listings(filters)]
    
    async def _load_place(self, place_id: str):
        place = await self.places.get_by_id(place_id)
        if place is None:
            raise PlaceNotFoundError(place_id)
        reviews = await self._fetch("reviews", self.reviews.get_by_place(place_id))
        return place, reviews or []
    
    async def get_place_detail(
        self,
        place_id: str,
        rating: Optional[int] = None,
        sort: ReviewSort = ReviewSort.LATEST,
    ) -> PlaceDetailResponse:
        """Страница места: статистика по всем отзывам и отфильтрованный список отзывов"""
        place, reviews = await self._load_place(place_id)
        with_stats = assemble([place], self._aggregates(reviews))[0]
        
        items = [to_review_item(r) for r in reviews]
        if rating is not None:
            items = [item for item in items if item.rating == rating]
        if sort == ReviewSort.HELPFUL:
            # sorted стабилен: при равенстве остаётся порядок "сначала новые"
            items = sorted(items, key=lambda item: item.helpful_count, reverse=True)
        
        return PlaceDetailResponse(place=with_stats, reviews=items)
    
    async def get_place_stats(self, place_id: str) -> PlaceStatsResponse:
        """Распределение оценок и последние отзывы"""
        place, reviews = await self._load_place(place_id)
        stats = self._aggregates(reviews).get(place.id) or empty_aggregate(place.id)
        
        distribution = {str(star): 0 for star in range(1, 6)}
        for review in reviews:
            distribution[str(clamp_rating(review.rating))] += 1
        
        return PlaceStatsResponse(
            place_id=place.id,
            name=place.name,
            average_rating=stats.average_rating,
            total_reviews=stats.review_count,
            short_excerpt=stats.short_excerpt,
            rating_distribution=distribution,
            recent_reviews=[to_review_item(r) for r in reviews[:RECENT_REVIEWS_LIMIT]],
        )
