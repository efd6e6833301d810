# expathub_api/routers/places.py
"""
Роутер для работы с местами
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from expathub_shared.models.enums import PlaceType, ReviewSort
from ..dependencies import get_listing_service
from ..exceptions import PlaceNotFoundError
from ..schemas.place import PlaceDetailResponse, PlaceFilters, PlaceStatsResponse
from ..services.listings import ListingService

router = APIRouter()


def get_place_filters(
    place_type: Optional[PlaceType] = Query(None, alias="type"),
    category: Optional[str] = None,
    location: Optional[str] = None,
    country: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=200),
) -> PlaceFilters:
    return PlaceFilters(
        type=place_type,
        category=category,
        location=location,
        country=country,
        limit=limit,
    )


@router.get("/", response_model=dict)
async def get_places(
    filters: PlaceFilters = Depends(get_place_filters),
    service: ListingService = Depends(get_listing_service),
):
    """Список объявлений с рейтингом и коротким отзывом"""
    cards = await service.get_listing_cards(filters)
    return {
        "places": [card.model_dump() for card in cards],
        "total": len(cards)
    }


@router.get("/map", response_model=dict)
async def get_map_places(
    filters: PlaceFilters = Depends(get_place_filters),
    service: ListingService = Depends(get_listing_service),
):
    """Места для карты"""
    items = await service.get_map_items(filters)
    return {
        "places": [item.model_dump() for item in items],
        "total": len(items)
    }


@router.get("/{place_id}", response_model=PlaceDetailResponse)
async def get_place(
    place_id: str,
    rating: Optional[int] = Query(None, ge=1, le=5),
    sort: ReviewSort = ReviewSort.LATEST,
    service: ListingService = Depends(get_listing_service),
):
    """Получение конкретного места с отзывами"""
    try:
        return await service.get_place_detail(place_id, rating=rating, sort=sort)
    except PlaceNotFoundError:
        raise HTTPException(status_code=404, detail="Place not found")


@router.get("/{place_id}/stats", response_model=PlaceStatsResponse)
async def get_place_stats(
    place_id: str,
    service: ListingService = Depends(get_listing_service),
):
    """Получение статистики по месту"""
    try:
        return await service.get_place_stats(place_id)
    except PlaceNotFoundError:
        raise HTTPException(status_code=404, detail="Place not found")
