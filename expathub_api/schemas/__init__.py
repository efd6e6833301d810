"""
Pydantic схемы для API
"""

from .review import ReviewCreate, ReviewUpdate, ReviewResponse, ReviewItem, ReactionRequest, ReactionResponse
from .place import (
    PlaceFilters, PlaceResponse, RatingSummary, PlaceAggregate, PlaceWithStats,
    ListingCard, MapItem, PlaceDetailResponse, PlaceStatsResponse,
)
from .translation import TranslateRequest, TranslateResponse

__all__ = [
    'ReviewCreate', 'ReviewUpdate', 'ReviewResponse', 'ReviewItem', 'ReactionRequest', 'ReactionResponse',
    'PlaceFilters', 'PlaceResponse', 'RatingSummary', 'PlaceAggregate', 'PlaceWithStats',
    'ListingCard', 'MapItem', 'PlaceDetailResponse', 'PlaceStatsResponse',
    'TranslateRequest', 'TranslateResponse',
]
