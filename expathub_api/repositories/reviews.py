# expathub_api/repositories/reviews.py
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from expathub_shared.models import Review, ReviewReaction


def helpful_count_update(review_id: str, delta: int):
    """UPDATE счётчика в одном запросе, без чтения в Python; ниже нуля не опускается"""
    return (
        update(Review)
        .where(Review.id == review_id)
        .values(helpful_count=func.greatest(Review.helpful_count + delta, 0))
        .returning(Review.helpful_count)
    )


class ReviewRepository:
    """Запросы к отзывам и реакциям на них"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def fetch_for_places(self, place_ids: Sequence[str]) -> List[Review]:
        """Отзывы для набора мест, сначала новые"""
        if not place_ids:
            return []
        result = await self.db.execute(
            select(Review)
            .where(Review.place_id.in_(list(place_ids)))
            .order_by(Review.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_place(self, place_id: str) -> List[Review]:
        return await self.fetch_for_places([place_id])

    async def get(self, review_id: str) -> Optional[Review]:
        result = await self.db.execute(select(Review).where(Review.id == review_id))
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> Review:
        review = Review(**fields)
        self.db.add(review)
        await self.db.flush()
        await self.db.refresh(review)
        return review

    async def update(self, review: Review, changes: Dict[str, Any]) -> Review:
        for key, value in changes.items():
            setattr(review, key, value)
        await self.db.flush()
        await self.db.refresh(review)
        return review

    async def delete(self, review: Review) -> None:
        await self.db.delete(review)
        await self.db.flush()

    # --- Реакции ---
    async def get_reaction(self, review_id: str, user_id: str) -> Optional[ReviewReaction]:
        result = await self.db.execute(
            select(ReviewReaction).where(
                ReviewReaction.review_id == review_id,
                ReviewReaction.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def save_reaction(self, review_id: str, user_id: str, reaction: str) -> Optional[ReviewReaction]:
        """Сохранить реакцию; None, если параллельный запрос успел раньше"""
        record = ReviewReaction(review_id=review_id, user_id=user_id, reaction=reaction)
        try:
            async with self.db.begin_nested():
                self.db.add(record)
        except IntegrityError:
            return None
        return record

    async def delete_reaction(self, review_id: str, user_id: str) -> bool:
        """Снять реакцию; False, если её уже нет"""
        result = await self.db.execute(
            delete(ReviewReaction).where(
                ReviewReaction.review_id == review_id,
                ReviewReaction.user_id == user_id
            )
        )
        return result.rowcount > 0

    async def adjust_helpful_count(self, review_id: str, delta: int) -> int:
        """Атомарно меняет счётчик "полезно" и возвращает новое значение"""
        result = await self.db.execute(
            helpful_count_update(review_id, delta),
            execution_options={"synchronize_session": "fetch"},
        )
        return result.scalar_one()
