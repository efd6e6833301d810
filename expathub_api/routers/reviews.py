# expathub_api/routers/reviews.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List
import logging

from ..dependencies import get_current_user_id, get_review_service
from ..exceptions import PlaceNotFoundError, ReviewNotFoundError, ReviewPermissionError
from ..schemas.review import ReactionRequest, ReactionResponse, ReviewCreate, ReviewResponse, ReviewUpdate
from ..services.reviews import ReviewService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
async def create_review(
    review_data: ReviewCreate,
    user_id: str = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
):
    """Создать отзыв"""
    try:
        review = await service.create_review(user_id, review_data)
    except PlaceNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Place not found"
        )
    return ReviewResponse.model_validate(review)

@router.get("/place/{place_id}", response_model=List[ReviewResponse])
async def get_reviews_by_place(
    place_id: str,
    service: ReviewService = Depends(get_review_service),
):
    """Получить отзывы по месту"""
    reviews = await service.list_for_place(place_id)
    return [ReviewResponse.model_validate(r) for r in reviews]

@router.patch("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: str,
    review_data: ReviewUpdate,
    user_id: str = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
):
    """Изменить отзыв"""
    try:
        review = await service.update_review(review_id, user_id, review_data)
    except ReviewNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    except ReviewPermissionError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the author can edit this review")
    return ReviewResponse.model_validate(review)

@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    review_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
):
    """Удалить отзыв"""
    try:
        await service.delete_review(review_id, user_id)
    except ReviewNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    except ReviewPermissionError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the author can delete this review")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{review_id}/reaction", response_model=ReactionResponse)
async def react_to_review(
    review_id: str,
    body: ReactionRequest,
    user_id: str = Depends(get_current_user_id),
    service: ReviewService = Depends(get_review_service),
):
    """Лайк / дизлайк отзыва"""
    try:
        return await service.react(review_id, user_id, body.reaction)
    except ReviewNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
