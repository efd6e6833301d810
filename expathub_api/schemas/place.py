from typing import Optional, List, Dict
from pydantic import Field
from .base import BaseSchema, TimestampSchema
from .review import ReviewItem
from expathub_shared.models.enums import PlaceType

DEFAULT_IMAGE_URL = "https://images.unsplash.com/photo-1453614512568-c4024d13c247?w=400"

class PlaceFilters(BaseSchema):
    """Фильтры списка мест"""
    type: Optional[PlaceType] = None
    category: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1, le=200)

class PlaceResponse(TimestampSchema):
    """Место в том виде, в каком оно хранится"""
    id: str
    type: PlaceType
    name: str
    category: str
    subtitle: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    location: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    work_hours: Optional[str] = None
    benefits: Optional[List[str]] = None
    deposit: Optional[str] = None
    size: Optional[str] = None

class RatingSummary(BaseSchema):
    """Средний рейтинг и количество отзывов"""
    average_rating: float = Field(ge=0, le=5)
    review_count: int = Field(ge=0)

class PlaceAggregate(RatingSummary):
    """Статистика места для карточки (не хранится, считается на каждый запрос)"""
    place_id: str
    short_excerpt: str = ""

class PlaceWithStats(PlaceResponse):
    """Место со статистикой отзывов"""
    average_rating: float = 0.0
    review_count: int = 0
    short_excerpt: str = ""

class ListingCard(BaseSchema):
    """Карточка в списке объявлений"""
    id: str
    category: str
    title: str
    subtitle: str = ""
    location: str = ""
    rating: float
    reviews: int
    image: str
    short_review: str = ""
    tags: List[str] = []
    work_hours: str = ""
    benefits: List[str] = []
    deposit: str = ""
    size: str = ""

class MapItem(BaseSchema):
    """Маркер на карте"""
    id: str
    name: str
    type: PlaceType
    category: str
    rating: float
    reviews: int
    lat: Optional[float] = None
    lng: Optional[float] = None
    subtitle: str = ""
    short_review: str = ""

class PlaceDetailResponse(BaseSchema):
    """Страница места с отзывами"""
    place: PlaceWithStats
    reviews: List[ReviewItem]

class PlaceStatsResponse(BaseSchema):
    """Статистика по месту"""
    place_id: str
    name: str
    average_rating: float
    total_reviews: int
    short_excerpt: str
    rating_distribution: Dict[str, int]
    recent_reviews: List[ReviewItem]
