# expathub_api/services/reviews.py
"""
Создание, изменение и удаление отзывов, реакции на них
"""

import logging
from typing import List, Optional

from expathub_shared.models import Review
from expathub_shared.models.enums import ReactionType
from ..exceptions import PlaceNotFoundError, ReviewNotFoundError, ReviewPermissionError
from ..repositories import PlaceRepository, ReviewRepository
from ..schemas.review import ReactionResponse, ReviewCreate, ReviewUpdate
from ..utils.review_content import compose_review_content, resolve_author_name, sentiment_for_rating
from .cache import PlaceStatsCache
from .reactions import resolve_reaction

logger = logging.getLogger(__name__)


class ReviewService:
    """Сервис отзывов"""
    
    def __init__(
        self,
        reviews: ReviewRepository,
        places: PlaceRepository,
        stats_cache: Optional[PlaceStatsCache] = None,
    ):
        self.reviews = reviews
        self.places = places
        self.stats_cache = stats_cache
    
    async def _invalidate(self, place_id: str) -> None:
        if self.stats_cache is not None:
            await self.stats_cache.invalidate(place_id)
    
    async def _get_own_review(self, review_id: str, user_id: str) -> Review:
        review = await self.reviews.get(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        if review.user_id != user_id:
            raise ReviewPermissionError(review_id)
        return review
    
    async def list_for_place(self, place_id: str) -> List[Review]:
        """Отзывы места, сначала новые"""
        return await self.reviews.get_by_place(place_id)
    
    async def create_review(self, user_id: str, data: ReviewCreate) -> Review:
        """Создать отзыв"""
        place = await self.places.get_by_id(data.place_id)
        if place is None:
            raise PlaceNotFoundError(data.place_id)
        
        review = await self.reviews.create(
            place_id=data.place_id,
            user_id=user_id,
            rating=data.rating,
            rating_details=data.rating_details,
            content=compose_review_content(data.pros, data.cons, data.tips),
            author_name=resolve_author_name(data.author_name, data.is_anonymous),
            author_country=data.author_country or "Unknown",
            sentiment=sentiment_for_rating(data.rating).value,
            helpful_count=0,
        )
        await self._invalidate(data.place_id)
        
        logger.info(f"Review created: user={user_id}, place={data.place_id}, rating={data.rating}")
        return review
    
    async def update_review(self, review_id: str, user_id: str, data: ReviewUpdate) -> Review:
        """Изменить свой отзыв"""
        review = await self._get_own_review(review_id, user_id)
        
        changes = data.model_dump(exclude_none=True)
        if "rating" in changes:
            changes["sentiment"] = sentiment_for_rating(changes["rating"]).value
        if not changes:
            return review
        
        review = await self.reviews.update(review, changes)
        await self._invalidate(review.place_id)
        
        logger.info(f"Review updated: id={review_id}, fields={sorted(changes)}")
        return review
    
    async def delete_review(self, review_id: str, user_id: str) -> None:
        """Удалить свой отзыв"""
        review = await self._get_own_review(review_id, user_id)
        place_id = review.place_id
        
        await self.reviews.delete(review)
        await self._invalidate(place_id)
        
        logger.info(f"Review deleted: id={review_id}, place={place_id}")
    
    async def react(self, review_id: str, user_id: str, requested: ReactionType) -> ReactionResponse:
        """Лайк / дизлайк отзыва"""
        review = await self.reviews.get(review_id)
        if review is None:
            raise ReviewNotFoundError(review_id)
        
        record = await self.reviews.get_reaction(review_id, user_id)
        current = ReactionType(record.reaction) if record is not None else None
        outcome = resolve_reaction(current, requested)
        helpful_count = review.helpful_count or 0
        
        if not outcome.changed:
            return ReactionResponse(
                review_id=review_id, reaction=outcome.reaction,
                helpful_count=helpful_count, changed=False,
            )
        
        if outcome.reaction is None:
            applied = await self.reviews.delete_reaction(review_id, user_id)
        else:
            applied = await self.reviews.save_reaction(review_id, user_id, outcome.reaction.value) is not None
        
        if not applied:
            # Параллельный запрос того же пользователя успел изменить реакцию
            logger.info(f"Reaction race: review={review_id}, user={user_id}")
            stored = await self.reviews.get_reaction(review_id, user_id)
            return ReactionResponse(
                review_id=review_id,
                reaction=ReactionType(stored.reaction) if stored is not None else None,
                helpful_count=helpful_count,
                changed=False,
            )
        
        if outcome.helpful_delta:
            helpful_count = await self.reviews.adjust_helpful_count(review_id, outcome.helpful_delta)
        
        return ReactionResponse(
            review_id=review_id,
            reaction=outcome.reaction,
            helpful_count=helpful_count,
            changed=True,
        )
